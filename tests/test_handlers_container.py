"""Integration tests for container-level requests."""

ACCOUNT = "/v1/AUTH_test"


class TestCreateContainer:
    async def test_create(self, client, store):
        resp = await client.put(f"{ACCOUNT}/photos")
        assert resp.status_code == 201
        assert "photos" in store.accounts["test"].containers

    async def test_create_existing_is_accepted(self, client):
        await client.put(f"{ACCOUNT}/photos")
        resp = await client.put(f"{ACCOUNT}/photos")
        assert resp.status_code == 202

    async def test_create_with_metadata(self, client):
        await client.put(f"{ACCOUNT}/photos", headers={"X-Container-Meta-Color": "blue"})
        resp = await client.head(f"{ACCOUNT}/photos")
        assert resp.headers["x-container-meta-color"] == "blue"

    async def test_name_too_long(self, client):
        resp = await client.put(f"{ACCOUNT}/{'c' * 257}")
        assert resp.status_code == 400


class TestHeadContainer:
    async def test_missing(self, client):
        resp = await client.head(f"{ACCOUNT}/nothing")
        assert resp.status_code == 404
        assert resp.content == b""

    async def test_stats(self, client):
        await client.put(f"{ACCOUNT}/photos")
        await client.put(f"{ACCOUNT}/photos/a", content=b"1234")
        await client.put(f"{ACCOUNT}/photos/b", content=b"56")
        resp = await client.head(f"{ACCOUNT}/photos")
        assert resp.status_code == 204
        assert resp.headers["x-container-object-count"] == "2"
        assert resp.headers["x-container-bytes-used"] == "6"


class TestListObjects:
    async def test_missing_container(self, client):
        resp = await client.get(f"{ACCOUNT}/nothing")
        assert resp.status_code == 404
        assert "<Code>NoSuchContainer</Code>" in resp.text

    async def test_empty(self, client):
        await client.put(f"{ACCOUNT}/photos")
        resp = await client.get(f"{ACCOUNT}/photos")
        assert resp.status_code == 204
        assert resp.headers["x-container-object-count"] == "0"

    async def test_sorted(self, client):
        await client.put(f"{ACCOUNT}/photos")
        for name in ("zebra", "apple", "mango"):
            await client.put(f"{ACCOUNT}/photos/{name}", content=b"x")
        resp = await client.get(f"{ACCOUNT}/photos")
        assert resp.status_code == 200
        assert resp.text == "apple\nmango\nzebra\n"

    async def test_delimiter(self, client):
        await client.put(f"{ACCOUNT}/photos")
        for name in ("2023/a.jpg", "2024/b.jpg", "2024/c.jpg", "readme"):
            await client.put(f"{ACCOUNT}/photos/{name}", content=b"x")
        resp = await client.get(f"{ACCOUNT}/photos", params={"delimiter": "/"})
        assert resp.text.splitlines() == ["2023/", "2024/", "readme"]

    async def test_prefix_and_end_marker(self, client):
        await client.put(f"{ACCOUNT}/photos")
        for name in ("a1", "a2", "a3", "b1"):
            await client.put(f"{ACCOUNT}/photos/{name}", content=b"x")
        resp = await client.get(f"{ACCOUNT}/photos", params={"prefix": "a", "end_marker": "a3"})
        assert resp.text.splitlines() == ["a1", "a2"]

    async def test_metadata_on_listing(self, client):
        await client.put(f"{ACCOUNT}/photos", headers={"X-Container-Meta-Color": "blue"})
        resp = await client.get(f"{ACCOUNT}/photos")
        assert resp.headers["x-container-meta-color"] == "blue"


class TestContainerMetadata:
    async def test_round_trip_and_delete(self, client):
        await client.put(f"{ACCOUNT}/photos")

        resp = await client.post(f"{ACCOUNT}/photos", headers={"X-Container-Meta-Foo": "bar"})
        assert resp.status_code == 204
        resp = await client.head(f"{ACCOUNT}/photos")
        assert resp.headers["x-container-meta-foo"] == "bar"

        await client.post(f"{ACCOUNT}/photos", headers={"X-Container-Meta-Foo": ""})
        resp = await client.head(f"{ACCOUNT}/photos")
        assert "x-container-meta-foo" not in resp.headers

    async def test_post_missing_container(self, client):
        resp = await client.post(f"{ACCOUNT}/nothing", headers={"X-Container-Meta-Foo": "bar"})
        assert resp.status_code == 404

    async def test_non_meta_headers_not_stored(self, client):
        await client.put(f"{ACCOUNT}/photos", headers={"X-Something-Else": "1"})
        resp = await client.head(f"{ACCOUNT}/photos")
        assert "x-something-else" not in resp.headers

    async def test_copy_not_allowed(self, client):
        await client.put(f"{ACCOUNT}/photos")
        resp = await client.request("COPY", f"{ACCOUNT}/photos")
        assert resp.status_code == 405


class TestDeleteContainer:
    async def test_delete(self, client, store):
        await client.put(f"{ACCOUNT}/photos")
        resp = await client.delete(f"{ACCOUNT}/photos")
        assert resp.status_code == 204
        assert "photos" not in store.accounts["test"].containers

    async def test_delete_missing(self, client):
        resp = await client.delete(f"{ACCOUNT}/nothing")
        assert resp.status_code == 404
        assert "<Code>NoSuchContainer</Code>" in resp.text

    async def test_delete_not_empty(self, client):
        await client.put(f"{ACCOUNT}/photos")
        await client.put(f"{ACCOUNT}/photos/cat.jpg", content=b"meow")
        resp = await client.delete(f"{ACCOUNT}/photos")
        assert resp.status_code == 409
        assert "<Code>Conflict</Code>" in resp.text
