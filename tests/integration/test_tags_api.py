"""API tests for tags, tag categories, time categories and saved filters."""

from datetime import date, timedelta

API = "/api/v1"


class TestTags:
    def test_create_and_read_back(self, client, auth_headers):
        payload = {
            "name": "Deadline",
            "keywords": ["due", "deadline"],
            "category": "general",
            "date_range": {"enabled": True, "start_days": 0, "end_days": 2},
        }

        created = client.post(f"{API}/tags/", json=payload, headers=auth_headers).json()

        assert created["name"] == "Deadline"
        assert created["keywords"] == ["due", "deadline"]
        assert created["date_range"] == {"enabled": True, "start_days": 0, "end_days": 2}

    def test_update_and_disable_range(self, client, auth_headers):
        tag = client.post(
            f"{API}/tags/",
            json={"name": "Soonish", "date_range": {"enabled": True, "start_days": 1, "end_days": 4}},
            headers=auth_headers,
        ).json()

        updated = client.put(
            f"{API}/tags/{tag['id']}",
            json={"keywords": ["eventually"], "date_range": {"enabled": False, "start_days": 1, "end_days": 4}},
            headers=auth_headers,
        ).json()

        assert updated["keywords"] == ["eventually"]
        assert updated["date_range"]["enabled"] is False

    def test_ensure_defaults_is_idempotent(self, client, auth_headers):
        first = client.post(f"{API}/tags/ensure-defaults", headers=auth_headers).json()
        second = client.post(f"{API}/tags/ensure-defaults", headers=auth_headers).json()

        assert len(first) == len(second)
        names = [tag["name"] for tag in second]
        for name in ("asap", "urgent", "soon", "later"):
            assert names.count(name) == 1

    def test_ensure_defaults_restores_deleted_tag(self, client, auth_headers):
        tags = client.get(f"{API}/tags/", headers=auth_headers).json()
        later = next(tag for tag in tags if tag["name"] == "later")
        client.delete(f"{API}/tags/{later['id']}", headers=auth_headers)

        restored = client.post(f"{API}/tags/ensure-defaults", headers=auth_headers).json()

        assert "later" in [tag["name"] for tag in restored]

    def test_preview_does_not_save(self, client, auth_headers):
        client.post(f"{API}/tags/", json={"name": "Work", "keywords": ["meeting"]}, headers=auth_headers)

        preview = client.post(
            f"{API}/tags/preview",
            json={"title": "Team meeting", "due_date": (date.today() + timedelta(days=2)).isoformat()},
            headers=auth_headers,
        ).json()

        assert sorted(preview["tag_names"]) == ["Work", "urgent"]
        assert client.get(f"{API}/tasks/", headers=auth_headers).json() == []

    def test_tags_are_private(self, client, auth_headers):
        from tests.conftest import register_and_login

        tag = client.post(f"{API}/tags/", json={"name": "Mine"}, headers=auth_headers).json()
        other = register_and_login(client, "other@example.com")

        assert client.delete(f"{API}/tags/{tag['id']}", headers=other).status_code == 403
        assert "Mine" not in [t["name"] for t in client.get(f"{API}/tags/", headers=other).json()]


class TestTagCategories:
    def test_defaults_are_seeded(self, client, auth_headers):
        keys = {c["key"] for c in client.get(f"{API}/tag-categories/", headers=auth_headers).json()}

        assert keys == {"general", "urgency-importance", "time-based", "effort"}

    def test_key_is_derived_from_name(self, client, auth_headers):
        created = client.post(f"{API}/tag-categories/", json={"name": "Home & Garden"}, headers=auth_headers)

        assert created.status_code == 201
        assert created.json()["key"] == "home-garden"

        duplicate = client.post(f"{API}/tag-categories/", json={"name": "Home Garden"}, headers=auth_headers)
        assert duplicate.status_code == 400

    def test_deleting_category_moves_tags_to_general(self, client, auth_headers):
        category = client.post(f"{API}/tag-categories/", json={"name": "Hobby"}, headers=auth_headers).json()
        tag = client.post(f"{API}/tags/", json={"name": "Guitar", "category": "hobby"}, headers=auth_headers).json()

        assert client.delete(f"{API}/tag-categories/{category['id']}", headers=auth_headers).status_code == 200

        tags = {t["id"]: t for t in client.get(f"{API}/tags/", headers=auth_headers).json()}
        assert tags[tag["id"]]["category"] == "general"

    def test_general_cannot_be_deleted(self, client, auth_headers):
        categories = client.get(f"{API}/tag-categories/", headers=auth_headers).json()
        general = next(c for c in categories if c["key"] == "general")

        assert client.delete(f"{API}/tag-categories/{general['id']}", headers=auth_headers).status_code == 400


class TestTimeCategories:
    def test_create_appends_to_the_end(self, client, auth_headers):
        created = client.post(f"{API}/time-categories/", json={"name": "Tomorrow"}, headers=auth_headers).json()

        assert created["order_index"] == 4

    def test_delete_clears_task_assignment(self, client, auth_headers):
        category = client.post(f"{API}/time-categories/", json={"name": "Tonight"}, headers=auth_headers).json()
        task = client.post(f"{API}/tasks/", json={"title": "Dishes"}, headers=auth_headers).json()
        client.put(
            f"{API}/tasks/{task['id']}/time-category", json={"category_id": category["id"]}, headers=auth_headers
        )

        client.delete(f"{API}/time-categories/{category['id']}", headers=auth_headers)

        assert client.get(f"{API}/tasks/{task['id']}", headers=auth_headers).json()["time_category_id"] is None


class TestSavedFilters:
    def test_filter_drops_deleted_tags(self, client, auth_headers):
        a = client.post(f"{API}/tags/", json={"name": "A"}, headers=auth_headers).json()
        b = client.post(f"{API}/tags/", json={"name": "B"}, headers=auth_headers).json()
        saved = client.post(
            f"{API}/filters/", json={"name": "Both", "tag_ids": [a["id"], b["id"], "bogus"]}, headers=auth_headers
        ).json()
        assert saved["tag_ids"] == [a["id"], b["id"]]

        client.delete(f"{API}/tags/{a['id']}", headers=auth_headers)

        filters = client.get(f"{API}/filters/", headers=auth_headers).json()
        assert filters[0]["tag_ids"] == [b["id"]]
