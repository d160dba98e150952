import pytest
from fastapi.testclient import TestClient

from fakes import FakeGemini, FailingStore
from database import get_db, get_store, RecordStore
from gemini_client import get_gemini_client, GeminiReply
from main import app
from service import DATA_ACCESS_ERROR_MESSAGE

ASSESSMENT = {
    "user_id": "u1",
    "skills": ["Python", "SQL", "Git"],
    "interests": ["Data", "AI"],
    "education": {"level": "Bachelor's", "field": "Computer Science", "gpa": "3.6"},
    "preferences": {
        "work_environment": ["Remote"],
        "work_style": ["Independent"],
        "salary": "80k-100k",
        "location": "Berlin",
    },
}


@pytest.fixture
def gemini():
    return FakeGemini()


@pytest.fixture
def client(session_factory, gemini):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_store] = lambda: RecordStore(session_factory)
    app.dependency_overrides[get_gemini_client] = lambda: gemini
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def catalog(store):
    data_scientist = store.insert("careers", {
        "title": "Data Scientist",
        "description": "Turn data into insight.",
        "required_skills": ["Python", "Statistics", "SQL"],
        "interests": ["Data", "AI", "Research"],
    })
    designer = store.insert("careers", {
        "title": "UX Designer",
        "required_skills": ["Figma"],
        "interests": ["Design"],
    })
    ml_course = store.insert("courses", {
        "title": "Machine Learning Foundations",
        "level": "Intermediate",
        "skills_gained": ["Python", "Statistics"],
    })
    return {"careers": [data_scientist, designer], "courses": [ml_course]}


def test_health(client):
    assert client.get("/").json()["status"] == "ok"


def test_submit_and_get_assessment(client):
    response = client.post("/assessment", json=ASSESSMENT)

    assert response.status_code == 200
    assert response.json()["skills"] == ["Python", "SQL", "Git"]

    fetched = client.get("/assessment/u1").json()
    assert fetched["education"]["field"] == "Computer Science"
    assert fetched["preferences"]["work_style"] == ["Independent"]


def test_resubmitting_assessment_overwrites(client):
    client.post("/assessment", json=ASSESSMENT)
    client.post("/assessment", json={"user_id": "u1", "skills": ["Figma"]})

    fetched = client.get("/assessment/u1").json()

    assert fetched["skills"] == ["Figma"]
    assert fetched["interests"] == []
    assert fetched["education"]["level"] == ""


def test_reset_assessment(client):
    client.post("/assessment", json=ASSESSMENT)

    assert client.delete("/assessment/u1").status_code == 200
    assert client.get("/assessment/u1").status_code == 404
    assert client.delete("/assessment/u1").status_code == 404


def test_invalid_payload_is_400(client):
    response = client.post("/assessment", json={"skills": "not-a-list"})

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_recommendations(client, catalog):
    client.post("/assessment", json=ASSESSMENT)

    body = client.get("/recommendations/u1").json()

    assert [c["title"] for c in body["careers"]] == ["Data Scientist"]
    assert body["careers"][0]["score"] == pytest.approx(200 / 3)
    assert [c["title"] for c in body["courses"]] == ["Machine Learning Foundations"]


def test_recommendations_and_assistant_break_ties_alike(client, store):
    for title in ["Data Analyst", "BI Analyst", "Analytics Engineer"]:
        store.insert("careers", {"title": title, "required_skills": ["SQL"], "interests": ["Data"]})
    client.post("/assessment", json=ASSESSMENT)

    ranked = [c["title"] for c in client.get("/recommendations/u1").json()["careers"]]
    message = client.post("/assistant", json={"message": "Which career?", "user_id": "u1"}).json()["message"]

    assert ranked == [c["title"] for c in store.list("careers")]
    assert [message.index(f"**{title}**") for title in ranked] == sorted(
        message.index(f"**{title}**") for title in ranked
    )


def test_recommendations_without_assessment(client, catalog):
    assert client.get("/recommendations/ghost").status_code == 404


def test_catalog_listing(client, catalog):
    assert {c["title"] for c in client.get("/careers").json()} == {"Data Scientist", "UX Designer"}
    assert client.get("/courses").json()[0]["skills_gained"] == ["Python", "Statistics"]


def test_save_and_unsave_career(client, catalog):
    career_id = catalog["careers"][0]["id"]

    assert client.post(f"/users/u1/saved-careers/{career_id}").status_code == 200
    assert client.post(f"/users/u1/saved-careers/{career_id}").status_code == 200
    assert [c["id"] for c in client.get("/users/u1/saved-careers").json()] == [career_id]

    assert client.delete(f"/users/u1/saved-careers/{career_id}").status_code == 200
    assert client.get("/users/u1/saved-careers").json() == []
    assert client.delete(f"/users/u1/saved-careers/{career_id}").status_code == 404


def test_save_unknown_career(client):
    assert client.post("/users/u1/saved-careers/missing").status_code == 404


def test_save_and_unsave_course(client, catalog):
    course_id = catalog["courses"][0]["id"]

    client.post(f"/users/u1/saved-courses/{course_id}")
    assert [c["title"] for c in client.get("/users/u1/saved-courses").json()] == ["Machine Learning Foundations"]

    client.delete(f"/users/u1/saved-courses/{course_id}")
    assert client.get("/users/u1/saved-courses").json() == []


def test_user_profile_upsert(client):
    assert client.get("/profiles/u1").status_code == 404

    client.put("/profiles/u1", json={"full_name": "Ada"})
    client.put("/profiles/u1", json={"full_name": "Ada Lovelace"})

    assert client.get("/profiles/u1").json() == {"user_id": "u1", "full_name": "Ada Lovelace"}


def test_assistant_with_profile(client, catalog):
    client.post("/assessment", json=ASSESSMENT)

    reply = client.post("/assistant", json={"message": "What job fits me?", "user_id": "u1"}).json()

    assert "1. **Data Scientist** (67% match)" in reply["message"]


def test_assistant_logged_out(client):
    reply = client.post("/assistant", json={"message": "career?"}).json()

    assert "please log in" in reply["message"]


def test_assistant_without_assessment(client):
    reply = client.post("/assistant", json={"message": "Tell me about jobs", "user_id": "u9"}).json()

    assert "Assessment page" in reply["message"]


def test_assistant_store_failure(client):
    app.dependency_overrides[get_store] = lambda: FailingStore("careers")

    response = client.post("/assistant", json={"message": "career?", "user_id": "u1"})

    assert response.status_code == 200
    assert response.json()["message"] == DATA_ACCESS_ERROR_MESSAGE


def test_conversation_flow(client, gemini):
    conversation = client.post("/conversations", json={"user_id": "u1"}).json()
    assert conversation["title"] == "New Career Conversation"

    first = client.post(
        f"/conversations/{conversation['id']}/messages",
        json={"user_id": "u1", "content": "How do I become a data scientist?"},
    ).json()
    assert [(m["role"], m["content"]) for m in first["messages"]] == [
        ("user", "How do I become a data scientist?"),
        ("assistant", "Here is some advice."),
    ]

    client.post(
        f"/conversations/{conversation['id']}/messages",
        json={"user_id": "u1", "content": "Thanks, what next?"},
    )
    message, history = gemini.calls[-1]
    assert message == "Thanks, what next?"
    assert [h["role"] for h in history] == ["user", "assistant"]

    listed = client.get("/conversations", params={"user_id": "u1"}).json()
    assert [c["id"] for c in listed] == [conversation["id"]]
    assert listed[0]["messages"] == []

    detail = client.get(f"/conversations/{conversation['id']}", params={"user_id": "u1"}).json()
    assert len(detail["messages"]) == 4


def test_conversation_belongs_to_user(client):
    conversation = client.post("/conversations", json={"user_id": "u1", "title": "Mine"}).json()

    assert client.get(f"/conversations/{conversation['id']}", params={"user_id": "u2"}).status_code == 404
    assert client.delete(f"/conversations/{conversation['id']}", params={"user_id": "u2"}).status_code == 404
    assert client.delete(f"/conversations/{conversation['id']}", params={"user_id": "u1"}).status_code == 200
    assert client.get("/conversations", params={"user_id": "u1"}).json() == []


def test_message_when_gemini_unavailable(client, gemini):
    gemini.available = False
    conversation = client.post("/conversations", json={"user_id": "u1"}).json()

    response = client.post(
        f"/conversations/{conversation['id']}/messages",
        json={"user_id": "u1", "content": "Hi"},
    )

    assert response.status_code == 503
    assert gemini.calls == []


def test_message_when_gemini_errors(client, gemini):
    gemini.reply = GeminiReply(text="The AI service is busy.", error="RATE_LIMITED")
    conversation = client.post("/conversations", json={"user_id": "u1"}).json()

    response = client.post(
        f"/conversations/{conversation['id']}/messages",
        json={"user_id": "u1", "content": "Hi"},
    )

    assert response.status_code == 502
    assert response.json()["detail"] == "The AI service is busy."

    detail = client.get(f"/conversations/{conversation['id']}", params={"user_id": "u1"}).json()
    assert [m["role"] for m in detail["messages"]] == ["user"]


def test_resume_analysis_local_fallback(client, gemini):
    gemini.available = False

    body = client.post("/resume/analyze", json={"content": "Jane Doe, Python developer"}).json()

    assert body["source"] == "local"
    assert body["score"] == 78
    assert len(body["strengths"]) == 4


def test_resume_analysis_with_gemini(client, gemini):
    gemini.reply = GeminiReply(
        text="Overall score: 82/100\nStrengths:\n1. Clear project descriptions\n"
             "Areas for improvement:\n1. Add measurable outcomes to each role"
    )

    body = client.post("/resume/analyze", json={"content": "Jane Doe, Python developer"}).json()

    assert body["source"] == "gemini"
    assert body["score"] == 82
    assert body["strengths"] == ["Clear project descriptions"]
    assert body["improvements"] == ["Add measurable outcomes to each role"]
