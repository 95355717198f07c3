import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.log_config import RequestIDFilter, request_id_var
from core.middleware import RequestIDMiddleware


def build_app():
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/ping")
    async def ping():
        return {"request_id": request_id_var.get()}

    return app


def test_incoming_request_id_is_echoed():
    with TestClient(build_app()) as client:
        response = client.get("/ping", headers={"X-Request-ID": "req-42"})

    assert response.headers["x-request-id"] == "req-42"
    assert response.json() == {"request_id": "req-42"}


def test_request_id_generated_when_missing():
    with TestClient(build_app()) as client:
        response = client.get("/ping")

    generated = response.headers["x-request-id"]
    assert len(generated) == 32
    assert response.json() == {"request_id": generated}


def test_filter_stamps_records_outside_requests():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    assert RequestIDFilter().filter(record) is True
    assert record.request_id == "-"
