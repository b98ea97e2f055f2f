import pytest
from fastapi.testclient import TestClient

from main import create_app
from utils.settings import Settings

PDF = ("paper.pdf", b"%PDF-1.4 test", "application/pdf")


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_DIR", str(tmp_path))
    app = create_app(Settings(simulated_latency=0.0, fallback_seed=1))
    with TestClient(app) as test_client:
        yield test_client


def _new_session(client, **payload):
    response = client.post("/sessions", json=payload)
    assert response.status_code == 200
    return response.json()["session_id"]


def test_health_reports_offline_mode(client):
    assert client.get("/health").json() == {"ok": True, "remote_configured": False, "offline_mode": True}


def test_upload_then_ask_round_trip(client):
    session_id = _new_session(client)

    upload = client.post(
        f"/sessions/{session_id}/documents",
        files=[("files", PDF)],
        data={"page_count": "7"},
    )
    assert upload.status_code == 200
    body = upload.json()
    assert body["document"]["id"] == "dummy-document-id"
    assert body["document"]["page_count"] == 7
    assert body["source"] == "fallback"

    answer = client.post(f"/sessions/{session_id}/questions", json={"question": "Can you summarize the key points?"})
    assert answer.status_code == 200
    result = answer.json()
    assert result["accepted"] is True
    assert result["answer_source"] == "fallback"
    assert result["reply"]["role"] == "answer"
    assert result["reply"]["content"].startswith("The key points include")
    assert result["message_count"] == 2

    messages = client.get(f"/sessions/{session_id}/messages").json()["messages"]
    assert [m["role"] for m in messages] == ["question", "answer"]


def test_question_without_document_is_rejected(client):
    session_id = _new_session(client)
    response = client.post(f"/sessions/{session_id}/questions", json={"question": "What are the conclusions?"})
    assert response.status_code == 409
    assert client.get(f"/sessions/{session_id}/messages").json()["messages"] == []


def test_blank_question_is_not_accepted(client):
    session_id = _new_session(client)
    client.post(f"/sessions/{session_id}/documents", files=[("files", PDF)])
    response = client.post(f"/sessions/{session_id}/questions", json={"question": "   "})
    assert response.status_code == 200
    assert response.json()["accepted"] is False
    assert response.json()["message_count"] == 0


def test_draft_is_used_when_question_is_omitted(client):
    session_id = _new_session(client)
    client.post(f"/sessions/{session_id}/documents", files=[("files", PDF)])
    client.put(f"/sessions/{session_id}/draft", json={"text": "What are the conclusions?"})
    result = client.post(f"/sessions/{session_id}/questions", json={}).json()
    assert result["accepted"] is True
    assert result["reply"]["content"].startswith("The document concludes")
    assert client.get(f"/sessions/{session_id}").json()["draft"] == ""


@pytest.mark.parametrize(
    "files",
    [
        [("files", PDF), ("files", ("second.pdf", b"%PDF", "application/pdf"))],
        [("files", ("notes.txt", b"hello", "text/plain"))],
    ],
)
def test_invalid_uploads_are_rejected(client, files):
    session_id = _new_session(client)
    response = client.post(f"/sessions/{session_id}/documents", files=files)
    assert response.status_code == 400
    assert client.get(f"/sessions/{session_id}").json()["document"] is None
    assert client.get("/documents").json()["documents"] == []


def test_dashboard_lists_documents_and_opens_sessions(client):
    session_id = _new_session(client)
    client.post(f"/sessions/{session_id}/documents", files=[("files", PDF)])

    documents = client.get("/documents").json()["documents"]
    assert [d["id"] for d in documents] == ["dummy-document-id"]
    assert client.get("/documents/dummy-document-id").json()["name"] == "paper.pdf"
    assert client.get("/documents/unknown").status_code == 404

    view = client.post("/sessions", json={"document_id": "dummy-document-id"}).json()
    assert view["document"]["name"] == "paper.pdf"
    assert view["message_count"] == 0
    assert view["state"] == "idle"
    assert "What are the conclusions?" in view["suggested_questions"]

    assert client.post("/sessions", json={"document_id": "unknown"}).status_code == 404


def test_unknown_and_ended_sessions_return_404(client):
    assert client.get("/sessions/missing").status_code == 404
    session_id = _new_session(client)
    assert client.delete(f"/sessions/{session_id}").json()["ended"] is True
    assert client.get(f"/sessions/{session_id}/messages").status_code == 404


def test_upload_into_session_with_history_is_rejected(client):
    session_id = _new_session(client)
    client.post(f"/sessions/{session_id}/documents", files=[("files", PDF)])
    client.post(f"/sessions/{session_id}/questions", json={"question": "What are the conclusions?"})

    response = client.post(
        f"/sessions/{session_id}/documents",
        files=[("files", ("other.pdf", b"%PDF-1.7", "application/pdf"))],
    )
    assert response.status_code == 409
    assert client.get("/documents").json()["documents"][0]["name"] == "paper.pdf"
    assert client.get(f"/sessions/{session_id}/messages").status_code == 200
    assert len(client.get(f"/sessions/{session_id}/messages").json()["messages"]) == 2
