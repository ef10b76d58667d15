"""
Search Prompts

Prompt templates sent to the generative text service:
- SUMMARY_PROMPT: narrative synthesis of every aggregated search result
- EXPLAIN_PROMPT: source-independent "what does this term mean" answer
- MUSIC_PROMPT: track suggestions returned as a JSON array

Fallback texts used when the service is unavailable live here too, so the
wording of everything the summary slot can show is in one place.
"""

SUMMARY_PROMPT = """You are a research assistant for a multi-source search engine.

The user searched for: "{query}"

Below are {count} results gathered from encyclopedias, the web, dictionaries,
news, images, videos and music. Each line is "[kind] title: description".

{corpus}

Write a concise narrative summary (2-3 short paragraphs) of what these sources
say about "{query}". Mention the most relevant facts and recent developments,
point out where sources agree or differ, and do not invent facts that are not
supported by the results. Plain prose, no markdown headings."""


EXPLAIN_PROMPT = """Explain what "{query}" means in plain language.

Give a general-knowledge definition in 3-5 sentences: what it is, why it
matters, and one concrete example. Do not reference search results or sources.
Plain prose, no markdown."""


MUSIC_PROMPT = """Search for music related to "{query}". Return ONLY a JSON array of {limit} music results with the following structure:
[{{"id": "unique_id", "title": "song_title", "artist": "artist_name", "album": "album_name", "url": "spotify_url", "thumbnail": "album_cover_url", "source": "Spotify", "duration": "3:45", "publishedAt": "2023-01-01"}}]"""


SUMMARY_FALLBACK = (
    'Found {count} results for "{query}". An AI summary is not available right now; '
    "browse the sources below for details."
)

EXPLAIN_FALLBACK = (
    'No explanation for "{query}" is available right now. '
    "Check the encyclopedia and dictionary results for a definition."
)

NO_RESULTS_MESSAGE = (
    'No sources found for "{query}". Try to broaden your search '
    "with more general or alternative terms."
)

AGGREGATION_FALLBACK = (
    'Search for "{query}" could not be completed right now. Please try again in a moment.'
)
