"""Integration tests for the accept-queue-persist workflow."""

from __future__ import annotations

import threading
from dataclasses import replace
from pathlib import Path

from core.config import SinkConfig
from serve.sink_server import SinkServer
from tests.fixture_paths import fixture_bytes

ORIGIN_HEADERS = {"Origin": "https://yudshj.synology.me"}


def _server(tmp_path: Path) -> SinkServer:
    config = replace(SinkConfig.from_env(), output_root=tmp_path / "json_out")
    return SinkServer(config)


def test_post_then_flush_persists_exact_bytes(tmp_path: Path) -> None:
    """A flushed payload should equal the request body byte-for-byte."""
    server = _server(tmp_path)
    body = fixture_bytes("payloads/spaced_payload.json")

    response = server.app.test_client().post("/save", data=body, headers=ORIGIN_HEADERS)
    server.persister.flush_once()

    assert response.status_code == 200
    assert (tmp_path / "json_out" / "exp-7" / "spaced-run.json").read_bytes() == body


def test_two_posts_before_one_flush_yield_two_files(tmp_path: Path) -> None:
    """Distinct names queued before a single flush should both be written."""
    server = _server(tmp_path)
    client = server.app.test_client()

    client.post("/save", data=b'{"name": "one", "majorRunId": "m"}', headers=ORIGIN_HEADERS)
    client.post("/save", data=b'{"name": "two", "majorRunId": "m"}', headers=ORIGIN_HEADERS)
    report = server.persister.flush_once()

    assert report.written_count == 2
    assert sorted(path.name for path in (tmp_path / "json_out" / "m").iterdir()) == [
        "one.json",
        "two.json",
    ]


def test_repeated_name_across_flushes_is_last_write_wins(tmp_path: Path) -> None:
    """A later POST with the same name should overwrite the earlier file."""
    server = _server(tmp_path)
    client = server.app.test_client()
    target_path = tmp_path / "json_out" / "same.json"

    client.post("/save", data=b'{"name": "same", "v": "old"}', headers=ORIGIN_HEADERS)
    server.persister.flush_once()
    client.post("/save", data=b'{"name":"same","v":"new"}', headers=ORIGIN_HEADERS)
    server.persister.flush_once()

    assert target_path.read_bytes() == b'{"name":"same","v":"new"}'


def test_rejected_payloads_never_reach_disk(tmp_path: Path) -> None:
    """Invalid bodies and origins should leave the output tree empty."""
    server = _server(tmp_path)
    client = server.app.test_client()

    statuses = [
        client.post("/save", data=b'{"name": ""}', headers=ORIGIN_HEADERS).status_code,
        client.post("/save", data=b"[1, 2]", headers=ORIGIN_HEADERS).status_code,
        client.post("/save", data=b'{"name": "x"', headers=ORIGIN_HEADERS).status_code,
        client.post(
            "/save", data=b'{"name": "x"}', headers={"Origin": "http://localhost"}
        ).status_code,
    ]
    server.persister.flush_once()

    assert statuses == [400, 400, 400, 403]
    assert not (tmp_path / "json_out").exists()


def test_concurrent_posts_with_running_persister_lose_nothing(tmp_path: Path) -> None:
    """Parallel submissions should all be written by the time the persister stops."""
    config = replace(
        SinkConfig.from_env(),
        output_root=tmp_path / "json_out",
        flush_interval_seconds=0.01,
    )
    server = SinkServer(config)
    server.start_background()

    def submit(worker_index: int) -> None:
        client = server.app.test_client()
        for index in range(20):
            body = f'{{"name": "w{worker_index}-{index}", "majorRunId": "w{worker_index}"}}'
            client.post("/save", data=body.encode(), headers=ORIGIN_HEADERS)

    workers = [threading.Thread(target=submit, args=(i,)) for i in range(4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    server.stop_background()

    written = list((tmp_path / "json_out").rglob("*.json"))
    assert len(written) == 80
