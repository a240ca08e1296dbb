"""Tests for resolving request paths into resource variants."""

import pytest

from mockswift.errors import InvalidURI, NoSuchAccount, NoSuchContainer
from mockswift.models import ContainerResource, ObjectResource, RootResource
from mockswift.resolver import resolve
from mockswift.storage import SwiftStore


@pytest.fixture
def populated() -> SwiftStore:
    store = SwiftStore()
    account = store.add_account("test", "test")
    photos = store.create_container(account, "photos")
    store.put_object(photos, "cat.jpg", b"meow")
    return store


class TestAccountLookup:
    """The account must exist whatever the rest of the path says."""

    @pytest.mark.parametrize(
        "path",
        [
            "/v1/AUTH_nobody",
            "/v1/AUTH_nobody/photos",
            "/v1/AUTH_nobody/photos/cat.jpg",
        ],
    )
    def test_unknown_account(self, populated, path):
        with pytest.raises(NoSuchAccount) as exc_info:
            resolve(populated, path)
        assert exc_info.value.http_status == 404

    def test_invalid_path(self, populated):
        with pytest.raises(InvalidURI):
            resolve(populated, "/not/a/swift/path")


class TestRoot:
    def test_root_resource(self, populated):
        resource = resolve(populated, "/v1/AUTH_test")
        assert isinstance(resource, RootResource)
        assert resource.account is populated.accounts["test"]


class TestContainer:
    def test_existing_container(self, populated):
        resource = resolve(populated, "/v1/AUTH_test/photos")
        assert isinstance(resource, ContainerResource)
        assert resource.name == "photos"
        assert resource.container is populated.accounts["test"].containers["photos"]

    def test_missing_container_is_not_an_error(self, populated):
        """Resolution defers the existence decision to the verb handler."""
        resource = resolve(populated, "/v1/AUTH_test/videos")
        assert isinstance(resource, ContainerResource)
        assert resource.name == "videos"
        assert resource.container is None

    def test_object_under_missing_container(self, populated):
        with pytest.raises(NoSuchContainer) as exc_info:
            resolve(populated, "/v1/AUTH_test/videos/clip.mp4")
        assert exc_info.value.http_status == 404
        assert exc_info.value.code == "NoSuchContainer"


class TestObject:
    def test_existing_object(self, populated):
        resource = resolve(populated, "/v1/AUTH_test/photos/cat.jpg")
        assert isinstance(resource, ObjectResource)
        assert resource.name == "cat.jpg"
        assert resource.container.name == "photos"
        assert resource.object is not None
        assert resource.object.data == b"meow"
        assert resource.version == ""

    def test_missing_object_is_not_an_error(self, populated):
        resource = resolve(populated, "/v1/AUTH_test/photos/dog.jpg")
        assert isinstance(resource, ObjectResource)
        assert resource.object is None

    def test_version_from_query(self, populated):
        resource = resolve(populated, "/v1/AUTH_test/photos/cat.jpg", {"versionId": "abc"})
        assert resource.version == "abc"

    def test_resources_reference_store_entities(self, populated):
        """Variants are views: mutations through them reach the store."""
        resource = resolve(populated, "/v1/AUTH_test/photos/cat.jpg")
        resource.container.objects.pop("cat.jpg")
        assert "cat.jpg" not in populated.accounts["test"].containers["photos"].objects
