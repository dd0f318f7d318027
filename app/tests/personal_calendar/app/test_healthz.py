from fastapi.testclient import TestClient

from personal_calendar.app import create_app


def test_ヘルスチェックが成功する() -> None:
    """`/healthz` がローカル環境で 200 / 期待 JSON を返すことを検証する。"""

    client = TestClient(create_app())

    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "env": "local"}


def test_リクエストIDが引き継がれる() -> None:
    client = TestClient(create_app())

    response = client.get("/healthz", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"
    assert "X-Response-Time-Ms" in response.headers


def test_リクエストIDが無ければ生成される() -> None:
    client = TestClient(create_app())

    response = client.get("/healthz")

    assert response.headers["X-Request-Id"]


def test_未処理の例外は500のJSONになる() -> None:
    app = create_app()

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("boom")

    client = TestClient(app)

    response = client.get("/boom", headers={"X-Request-Id": "req-err"})

    assert response.status_code == 500
    assert response.json()["detail"]["error"]["code"] == "UNEXPECTED_ERROR"
    assert response.headers["X-Request-Id"] == "req-err"
