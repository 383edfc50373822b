from pathlib import Path

from fastapi.testclient import TestClient
import pytest

from quiz_player.core.quiz_controller import QuizController
from quiz_player.core.quiz_source import QuizSource
from quiz_player.server.api_server import create_api_app


@pytest.fixture
def controller(quiz_dir: Path) -> QuizController:
    return QuizController(QuizSource(quiz_dir / "quiz-list.json"), language="en")


@pytest.fixture
def client(controller: QuizController) -> TestClient:
    return TestClient(create_api_app(controller))


def _load_maths(client: TestClient) -> dict:
    client.post("/catalog/refresh")
    response = client.post("/quiz", json={"identifier": "maths.json"})
    assert response.status_code == 200
    return response.json()


def test_player_page_is_served(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert 'id="quizSelect"' in response.text


def test_catalog_before_loading_is_disabled(client):
    data = client.get("/catalog").json()
    assert data["enabled"] is False
    assert data["categories"] == []
    assert data["placeholder"] == "— Select a quiz —"


def test_refresh_catalog_lists_quizzes(client):
    data = client.post("/catalog/refresh").json()
    assert data["enabled"] is True
    assert data["categories"] == [
        {
            "name": "கணிதம்",
            "quizzes": [
                {"identifier": "maths.json", "title": "Maths basics"},
                {"identifier": "empty.json", "title": "Empty quiz"},
            ],
        }
    ]


def test_state_before_any_quiz(client):
    data = client.get("/state").json()
    assert data["status"] == "loading"
    assert data["question"] is None
    assert data["result"] is None
    assert data["progress"] == ""


def test_load_quiz_returns_first_question(client):
    data = _load_maths(client)
    assert data["status"] == "in_progress"
    assert data["title"] == "Maths basics"
    assert data["progress"] == "Question 1 / 2"
    question = data["question"]
    assert question["position"] == 0
    assert [option["label"] for option in question["options"]] == ["(அ)", "(ஆ)"]
    assert question["selectable"] is True
    assert question["correct_index"] is None
    assert question["explanation_html"] is None


def test_load_quiz_failure_is_unprocessable(client):
    _load_maths(client)
    response = client.post("/quiz", json={"identifier": "empty.json"})
    assert response.status_code == 422
    assert "No questions found" in response.json()["detail"]
    assert client.get("/state").json()["title"] == "Maths basics"


def test_answer_reveals_feedback(client):
    _load_maths(client)
    data = client.post("/answer", json={"choice_index": 0}).json()
    question = data["question"]
    assert question["answered"] is True
    assert question["is_correct"] is False
    assert question["correct_index"] == 1
    assert "Two pairs make four." in question["explanation_html"]
    assert data["note"] == "❌ Wrong answer."


def test_answer_without_quiz_conflicts(client):
    response = client.post("/answer", json={"choice_index": 0})
    assert response.status_code == 409


def test_answer_requires_choice_index(client):
    _load_maths(client)
    assert client.post("/answer", json={}).status_code == 422


def test_full_run_produces_result(client):
    _load_maths(client)
    client.post("/answer", json={"choice_index": 1})
    client.post("/next")
    client.post("/answer", json={"choice_index": 1})
    data = client.post("/next").json()

    assert data["status"] == "completed"
    assert data["result"] == {"title": "Maths basics", "score": 2, "total": 2, "percentage": 100}
    assert data["labels"]["result_score"] == "Score: 2 / 2"
    assert client.post("/next").status_code == 409
    assert client.post("/previous").status_code == 409


def test_previous_at_start_stays_put(client):
    _load_maths(client)
    data = client.post("/previous").json()
    assert data["question"]["position"] == 0


def test_finish_early(client):
    _load_maths(client)
    client.post("/answer", json={"choice_index": 1})
    data = client.post("/finish").json()
    assert data["result"]["score"] == 1
    assert data["result"]["percentage"] == 50


def test_prompt_markdown_is_rendered_with_math_intact(client):
    data = _load_maths(client)
    assert data["question"]["prompt_html"].startswith("<p>")
    assert "$2 + 2$" in data["question"]["prompt_html"]


def test_result_listener_keeps_browser_result_display(controller, client):
    received = []
    controller.subscribe_results(received.append)
    _load_maths(client)
    client.post("/answer", json={"choice_index": 1})

    data = client.post("/finish").json()

    assert data["status"] == "completed"
    assert data["custom_results"] is False
    assert data["result"]["score"] == 1
    assert received == [data["result"]]


def test_custom_renderer_is_reported_to_the_page(controller, client):
    class Renderer:
        def show_results(self, score, total, title):
            pass

    controller.set_results_renderer(Renderer())
    _load_maths(client)
    assert client.post("/finish").json()["custom_results"] is True


def test_player_page_reads_shared_state(client):
    page = client.get("/").text
    assert "request('GET', '/state')" in page
    assert "setInterval(refreshState" in page


def test_state_reflects_actions_from_another_front_end(controller, client):
    _load_maths(client)
    controller.select_answer(1)
    controller.next_question()

    data = client.get("/state").json()

    assert data["question"]["position"] == 1
    assert data["progress"] == "Question 2 / 2"


def test_rejected_action_is_logged_as_error(client, caplog):
    with caplog.at_level("ERROR", logger="quiz_player.server.api_server"):
        assert client.post("/next").status_code == 409
    assert any(
        record.levelname == "ERROR" and "Quiz action rejected" in record.getMessage()
        for record in caplog.records
    )
