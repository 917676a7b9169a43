import json

import pytest

from pokefight.services import (
    AbstractService,
    HttpStatus,
    ServiceException,
    ServicesManager,
    VersionService,
)


class EchoService(AbstractService):
    def __init__(self):
        super().__init__("/echo")
        self.calls = []

    def get(self, id):
        self.calls.append(("get", id))
        return HttpStatus.OK, {"id": id}

    def post(self, data, id):
        self.calls.append(("post", data, id))
        return HttpStatus.NO_CONTENT

    def put(self, data):
        self.calls.append(("put", data))
        return HttpStatus.CREATED, data

    def remove(self, id):
        self.calls.append(("remove", id))
        return HttpStatus.NO_CONTENT


@pytest.fixture
def manager():
    m = ServicesManager()
    m.register_service(VersionService())
    m.register_service(EchoService())
    return m


def test_version_service_get():
    assert VersionService().get(0) == (HttpStatus.OK, {"major": 1, "minor": 0})


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.get(1),
        lambda s: s.post({}, 1),
        lambda s: s.put({}),
        lambda s: s.remove(1),
    ],
)
def test_abstract_methods_not_implemented(call):
    with pytest.raises(ServiceException) as info:
        call(AbstractService("/x"))
    assert info.value.status is HttpStatus.NOT_IMPLEMENTED
    assert str(info.value) == "Non implanté"


def test_service_exception_carries_status_and_message():
    exc = ServiceException(HttpStatus.BAD_REQUEST, "oops")
    assert exc.status is HttpStatus.BAD_REQUEST
    assert exc.message == "oops"
    assert str(exc) == "oops"


def test_find_service_matches_prefix_and_subpath(manager):
    assert manager.find_service("/version").pattern == "/version"
    assert manager.find_service("/version/3").pattern == "/version"
    assert manager.find_service("/echo/9").pattern == "/echo"


def test_find_service_rejects_partial_words(manager):
    assert manager.find_service("/versions") is None
    assert manager.find_service("/other") is None


def test_get_version_styled_output(manager):
    status, text = manager.query_service("/version", "GET")
    assert status is HttpStatus.OK
    assert text == '{\n   "major" : 1,\n   "minor" : 0\n}\n'
    assert json.loads(text) == {"major": 1, "minor": 0}


def test_unknown_service_not_found(manager):
    with pytest.raises(ServiceException) as info:
        manager.query_service("/nothing", "GET")
    assert info.value.status is HttpStatus.NOT_FOUND
    assert "/nothing" in info.value.message


@pytest.mark.parametrize("url", ["/echo/", "/echo/abc", "/echo/12x", "/echo/1 "])
def test_malformed_ids(manager, url):
    with pytest.raises(ServiceException) as info:
        manager.query_service(url, "GET")
    assert info.value.status is HttpStatus.BAD_REQUEST


@pytest.mark.parametrize(("url", "expected"), [("/echo", 0), ("/echo/42", 42), ("/echo/+7", 7), ("/echo/-3", -3)])
def test_id_parsing(manager, url, expected):
    status, text = manager.query_service(url, "GET")
    assert status is HttpStatus.OK
    assert json.loads(text) == {"id": expected}


def test_post_passes_parsed_body(manager):
    status, text = manager.query_service("/echo/5", "POST", '{"a": [1, 2]}')
    assert status is HttpStatus.NO_CONTENT
    assert text == ""
    echo = manager.find_service("/echo")
    assert echo.calls[-1] == ("post", {"a": [1, 2]}, 5)


def test_put_returns_styled_payload(manager):
    status, text = manager.query_service("/echo", "PUT", '{"k": "v"}')
    assert status is HttpStatus.CREATED
    assert json.loads(text) == {"k": "v"}


def test_delete_passes_id(manager):
    status, _ = manager.query_service("/echo/8", "DELETE")
    assert status is HttpStatus.NO_CONTENT
    assert manager.find_service("/echo").calls[-1] == ("remove", 8)


@pytest.mark.parametrize("method", ["POST", "PUT"])
def test_invalid_json_body(manager, method):
    with pytest.raises(ServiceException) as info:
        manager.query_service("/echo", method, "{not json")
    assert info.value.status is HttpStatus.BAD_REQUEST


def test_invalid_method(manager):
    with pytest.raises(ServiceException) as info:
        manager.query_service("/echo", "PATCH")
    assert info.value.status is HttpStatus.BAD_REQUEST
    assert "PATCH" in info.value.message


def test_post_to_version_not_implemented(manager):
    with pytest.raises(ServiceException) as info:
        manager.query_service("/version", "POST", "{}")
    assert info.value.status is HttpStatus.NOT_IMPLEMENTED


def test_first_registered_service_wins():
    m = ServicesManager()
    first = EchoService()
    second = EchoService()
    m.register_service(first)
    m.register_service(second)
    assert m.find_service("/echo") is first