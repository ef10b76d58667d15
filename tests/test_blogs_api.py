"""
Tests for the blog endpoints.
"""


def post_blog(client, headers, slug="hello-world", **overrides):
    payload = {
        "title": "Hello World",
        "content": "First post body",
        "excerpt": "A first post",
        "slug": slug,
        "tags": ["intro"],
        "is_published": True,
    }
    payload.update(overrides)
    return client.post("/api/blogs", json=payload, headers=headers)


class TestCreate:
    def test_requires_auth(self, client):
        assert post_blog(client, headers={}).status_code == 401

    def test_create_published(self, client, auth_headers):
        headers, user = auth_headers()
        response = post_blog(client, headers)

        assert response.status_code == 201
        body = response.json()
        assert body["user_id"] == user["id"]
        assert body["published_at"] is not None
        assert body["view_count"] == 0
        assert "content" not in body

    def test_blank_title_rejected(self, client, auth_headers):
        headers, _ = auth_headers()
        assert post_blog(client, headers, title="   ").status_code == 422

    def test_duplicate_slug(self, client, auth_headers):
        headers, _ = auth_headers()
        assert post_blog(client, headers).status_code == 201
        response = post_blog(client, headers)
        assert response.status_code == 400
        assert "slug" in response.json()["detail"]


class TestRead:
    def test_list_only_published(self, client, auth_headers):
        headers, _ = auth_headers()
        post_blog(client, headers, slug="public")
        post_blog(client, headers, slug="draft", is_published=False)

        slugs = [blog["slug"] for blog in client.get("/api/blogs").json()]
        assert slugs == ["public"]

    def test_list_search(self, client, auth_headers):
        headers, _ = auth_headers()
        post_blog(client, headers, slug="rust", title="Learning Rust")
        post_blog(client, headers, slug="garden", title="Gardening", content="Tomatoes", excerpt="Soil")

        slugs = [blog["slug"] for blog in client.get("/api/blogs", params={"search": "rust"}).json()]
        assert slugs == ["rust"]

    def test_get_by_slug_counts_views(self, client, auth_headers):
        headers, _ = auth_headers()
        post_blog(client, headers)

        first = client.get("/api/blogs/hello-world")
        second = client.get("/api/blogs/hello-world")

        assert first.status_code == 200
        assert first.json()["content"] == "First post body"
        assert second.json()["view_count"] == first.json()["view_count"] + 1

    def test_draft_not_readable_by_slug(self, client, auth_headers):
        headers, _ = auth_headers()
        post_blog(client, headers, is_published=False)
        response = client.get("/api/blogs/hello-world")
        assert response.status_code == 404
        assert response.json()["detail"] == "Blog not found"

    def test_my_blogs_by_status(self, client, auth_headers):
        headers, _ = auth_headers()
        post_blog(client, headers, slug="public")
        post_blog(client, headers, slug="draft", is_published=False)

        all_slugs = {b["slug"] for b in client.get("/api/blogs/my", headers=headers).json()}
        drafts = [b["slug"] for b in client.get("/api/blogs/my", params={"status": "drafts"}, headers=headers).json()]

        assert all_slugs == {"public", "draft"}
        assert drafts == ["draft"]


class TestUpdateDelete:
    def test_owner_can_unpublish(self, client, auth_headers):
        headers, _ = auth_headers()
        blog_id = post_blog(client, headers).json()["id"]

        response = client.put(f"/api/blogs/{blog_id}", json={"is_published": False}, headers=headers)

        assert response.status_code == 200
        assert response.json()["is_published"] is False
        assert response.json()["published_at"] is None
        assert response.json()["title"] == "Hello World"

    def test_other_user_cannot_update(self, client, auth_headers):
        owner_headers, _ = auth_headers()
        other_headers, _ = auth_headers(email="other@example.com", username="other")
        blog_id = post_blog(client, owner_headers).json()["id"]

        response = client.put(f"/api/blogs/{blog_id}", json={"title": "Hijacked"}, headers=other_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Blog not found or unauthorized"

    def test_delete(self, client, auth_headers):
        headers, _ = auth_headers()
        blog_id = post_blog(client, headers).json()["id"]

        response = client.delete(f"/api/blogs/{blog_id}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Blog deleted successfully"}
        assert client.get("/api/blogs/hello-world").status_code == 404

    def test_other_user_cannot_delete(self, client, auth_headers):
        owner_headers, _ = auth_headers()
        other_headers, _ = auth_headers(email="other@example.com", username="other")
        blog_id = post_blog(client, owner_headers).json()["id"]

        response = client.delete(f"/api/blogs/{blog_id}", headers=other_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Blog not found or unauthorized"
        assert client.get("/api/blogs/hello-world").status_code == 200

    def test_null_publish_flag_leaves_state_unchanged(self, client, auth_headers):
        headers, _ = auth_headers()
        created = post_blog(client, headers).json()

        response = client.put(f"/api/blogs/{created['id']}", json={"is_published": None, "title": None}, headers=headers)

        assert response.status_code == 200
        assert response.json()["is_published"] is True
        assert response.json()["published_at"] is not None
        assert response.json()["title"] == "Hello World"

    def test_republish_keeps_original_date(self, client, auth_headers):
        headers, _ = auth_headers()
        created = post_blog(client, headers).json()

        response = client.put(f"/api/blogs/{created['id']}", json={"is_published": True}, headers=headers)

        assert response.json()["published_at"] == created["published_at"]

    def test_publishing_a_draft_sets_date(self, client, auth_headers):
        headers, _ = auth_headers()
        created = post_blog(client, headers, is_published=False).json()
        assert created["published_at"] is None

        response = client.put(f"/api/blogs/{created['id']}", json={"is_published": True}, headers=headers)

        assert response.json()["published_at"] is not None
        assert client.get("/api/blogs/hello-world").status_code == 200
