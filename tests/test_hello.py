from fastapi.testclient import TestClient

from hello_server.main import app

client = TestClient(app)


def test_hello():
    response = client.get("/hello")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Hello world"


def test_hello_ignores_query_string():
    response = client.get("/hello", params={"name": "x"})
    assert response.status_code == 200
    assert response.text == "Hello world"


def test_unknown_path_is_not_found():
    response = client.get("/missing")
    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "404 Not Found"


def test_root_is_not_found():
    response = client.get("/")
    assert response.status_code == 404
    assert response.text == "404 Not Found"


def test_trailing_slash_is_not_redirected():
    response = client.get("/hello/", follow_redirects=False)
    assert response.status_code == 404
    assert response.text == "404 Not Found"


def test_other_methods_on_hello_are_not_found():
    for method in ("POST", "PUT", "PATCH", "DELETE", "OPTIONS"):
        response = client.request(method, "/hello")
        assert response.status_code == 404, method
        assert response.text == "404 Not Found"


def test_head_on_hello_is_not_found():
    response = client.head("/hello")
    assert response.status_code == 404


def test_post_to_unknown_path_is_not_found():
    response = client.post("/missing", content=b"ignored")
    assert response.status_code == 404
    assert response.text == "404 Not Found"


def test_path_matching_is_case_sensitive():
    response = client.get("/HELLO")
    assert response.status_code == 404
    assert response.text == "404 Not Found"
