from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import USER_ID, FakeGoalSource, FakeJournalSource
from waki.apps.api import main as api_main
from waki.apps.api.deps.auth import get_current_user_id
from waki.apps.api.main import app
from waki.apps.engine.analytics import AnalyticsService, AnalyticsUnavailableError, DashboardUnavailableError
from waki.apps.services.errors import RecordAccessError, RecordNotFoundError
from waki.libs.schemas import Alarm, AlarmCreate, AppSettings, PreferencesUpdate, UserPreferences, get_settings


@pytest.fixture(autouse=True)
def override_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAKI_ENVIRONMENT", "test")


@pytest.fixture
def goal_store(make_goal):
    store = FakeGoalSource([
        make_goal(category="health", progress=100, is_completed=True),
        make_goal(category="career", progress=20, target_in_days=3),
    ])
    store.update_progress = AsyncMock()
    store.link_journal_entry = AsyncMock()
    store.delete_goal = AsyncMock()
    return store


@pytest.fixture
def alarm_store(now):
    store = MagicMock()
    store.create_alarm = AsyncMock(return_value=Alarm(
        id="a1", user_id=USER_ID, time="06:30", days=[1, 2, 3, 4, 5], created_at=now, updated_at=now,
    ))
    store.list_alarms = AsyncMock(return_value=[])
    store.get_alarm = AsyncMock()
    store.update_alarm = AsyncMock()
    store.delete_alarm = AsyncMock()
    return store


@pytest.fixture
def preferences_store():
    store = MagicMock()
    store.get_preferences = AsyncMock(return_value=UserPreferences(user_id=USER_ID))
    store.update_preferences = AsyncMock(return_value=UserPreferences(user_id=USER_ID, voice_style="calm"))
    return store


@pytest.fixture
def client(make_entry, goal_store, alarm_store, preferences_store, clock):
    journal = FakeJournalSource([make_entry(days_ago=d, mood="grateful") for d in (0, 1)])
    app.state.journal = journal
    app.state.goals = goal_store
    app.state.alarms = alarm_store
    app.state.preferences = preferences_store
    app.state.analytics = AnalyticsService(journal, goal_store, clock)
    app.dependency_overrides[get_current_user_id] = lambda: USER_ID
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_dashboard_uses_camel_case_keys(client: TestClient) -> None:
    response = client.get("/analytics/dashboard")

    assert response.status_code == 200
    body = response.json()
    assert body["streaks"]["currentStreak"] == 2
    assert body["journalStats"]["mostCommonMood"] == "grateful"
    assert body["goalProgress"]["upcomingDeadlines"] == [{"title": "Run a 10k", "daysLeft": 3}]
    assert len(body["recommendations"]) <= 3


def test_dashboard_failure_returns_500(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        app.state.analytics,
        "compute_dashboard",
        AsyncMock(side_effect=DashboardUnavailableError("down")),
    )

    response = client.get("/analytics/dashboard")

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to get dashboard data"}


def test_export_csv_is_an_attachment(client: TestClient) -> None:
    response = client.get("/analytics/export", params={"format": "csv"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == "attachment; filename=analytics.csv"
    assert response.text.splitlines()[0] == "Date,Mood,Sentiment,Entries"


def test_export_defaults_to_json(client: TestClient) -> None:
    response = client.get("/analytics/export")

    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["moodTrends"][0]["entryCount"] == 1


def test_export_rejects_unknown_format(client: TestClient) -> None:
    assert client.get("/analytics/export", params={"format": "xml"}).status_code == 422


def test_goal_stats_route(client: TestClient) -> None:
    body = client.get("/goals/progress").json()

    assert body["totalGoals"] == 2
    assert body["completionRate"] == 50
    assert body["categoriesBreakdown"] == {"health": 1, "career": 1}


def test_goal_errors_map_to_http(client: TestClient, goal_store) -> None:
    goal_store.update_progress.side_effect = RecordNotFoundError("goal", "missing")
    goal_store.delete_goal.side_effect = RecordAccessError("goal", "other")

    assert client.put("/goals/missing/progress", json={"progress": 10}).status_code == 404
    assert client.delete("/goals/other").status_code == 403


def test_requests_without_token_are_rejected(client: TestClient) -> None:
    app.dependency_overrides.pop(get_current_user_id)
    app.dependency_overrides[get_settings] = lambda: AppSettings(DEMO_MODE=False)

    assert client.get("/analytics/dashboard").status_code == 401


def test_demo_mode_falls_back_to_demo_user(client: TestClient) -> None:
    app.dependency_overrides.pop(get_current_user_id)
    app.dependency_overrides[get_settings] = lambda: AppSettings(DEMO_MODE=True, DEMO_USER_ID="demo-user")

    response = client.get("/analytics/dashboard")

    assert response.status_code == 200
    assert app.state.journal.calls[0]["user_id"] == "demo-user"


def test_goal_progress_requires_a_value(client: TestClient, goal_store) -> None:
    assert client.put("/goals/g1/progress", json={}).status_code == 422
    goal_store.update_progress.assert_not_called()


def test_mood_stats_route(client: TestClient) -> None:
    response = client.get("/journal/mood-stats", params={"days": 7})

    assert response.status_code == 200
    assert response.json() == {"days": 7, "totalEntries": 2, "moods": {"grateful": 2}}


def test_mood_stats_validates_days(client: TestClient) -> None:
    assert client.get("/journal/mood-stats", params={"days": 0}).status_code == 422


def test_mood_stats_failure_returns_500(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        app.state.analytics,
        "get_mood_stats",
        AsyncMock(side_effect=AnalyticsUnavailableError("down")),
    )

    response = client.get("/journal/mood-stats")

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to fetch mood statistics"}


def test_create_alarm_returns_camel_case(client: TestClient, alarm_store) -> None:
    response = client.post("/alarms", json={"time": "06:30"})

    assert response.status_code == 201
    assert response.json()["snoozeDuration"] == 10
    alarm_store.create_alarm.assert_awaited_once_with(USER_ID, AlarmCreate(time="06:30"))


def test_create_alarm_rejects_bad_time(client: TestClient, alarm_store) -> None:
    assert client.post("/alarms", json={"time": "7am"}).status_code == 422
    alarm_store.create_alarm.assert_not_called()


def test_alarm_errors_map_to_http(client: TestClient, alarm_store) -> None:
    alarm_store.get_alarm.side_effect = RecordNotFoundError("alarm", "missing")
    alarm_store.update_alarm.side_effect = RecordAccessError("alarm", "other")

    assert client.get("/alarms/missing").status_code == 404
    assert client.put("/alarms/other", json={"label": "Gym"}).status_code == 403


def test_delete_alarm_returns_no_content(client: TestClient, alarm_store) -> None:
    response = client.delete("/alarms/a1")

    assert response.status_code == 204
    assert response.content == b""
    alarm_store.delete_alarm.assert_awaited_once_with(USER_ID, "a1")


def test_preferences_defaults(client: TestClient) -> None:
    body = client.get("/preferences").json()

    assert body["userId"] == USER_ID
    assert body["location"] == {"city": "New York", "country": "US", "lat": None, "lon": None}
    assert body["voiceStyle"] == "friendly"
    assert body["includeWeather"] is True


def test_update_preferences_accepts_camel_case(client: TestClient, preferences_store) -> None:
    response = client.put("/preferences", json={"voiceStyle": "calm", "includeNews": True})

    assert response.status_code == 200
    assert response.json()["voiceStyle"] == "calm"
    _, updates = preferences_store.update_preferences.await_args.args
    assert updates == PreferencesUpdate(voice_style="calm", include_news=True)


class _IdentityClient:
    def __init__(self, response=None, error=None) -> None:
        self.response = response
        self.error = error
        self.requests = []

    def __call__(self, *args, **kwargs):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False

    async def get(self, url, headers=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def test_bearer_token_resolves_identity_user(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    identity = _IdentityClient(response=httpx.Response(200, json={"id": "user-42"}))
    monkeypatch.setattr("waki.apps.api.deps.auth.httpx.AsyncClient", identity)
    app.dependency_overrides.pop(get_current_user_id)
    app.dependency_overrides[get_settings] = lambda: AppSettings(
        DEMO_MODE=False, SUPABASE_URL="https://identity.test/", SUPABASE_ANON_KEY="anon"
    )

    response = client.get("/analytics/dashboard", headers={"Authorization": "Bearer tok-1"})

    assert response.status_code == 200
    assert app.state.journal.calls[0]["user_id"] == "user-42"
    assert identity.requests[0]["url"] == "https://identity.test/auth/v1/user"
    assert identity.requests[0]["headers"] == {"Authorization": "Bearer tok-1", "apikey": "anon"}


def test_rejected_token_is_unauthenticated(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    identity = _IdentityClient(response=httpx.Response(401, json={"msg": "invalid JWT"}))
    monkeypatch.setattr("waki.apps.api.deps.auth.httpx.AsyncClient", identity)
    app.dependency_overrides.pop(get_current_user_id)
    app.dependency_overrides[get_settings] = lambda: AppSettings(DEMO_MODE=False)

    assert client.get("/analytics/dashboard", headers={"Authorization": "Bearer bad"}).status_code == 401


def test_identity_outage_falls_back_to_demo_user(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    identity = _IdentityClient(error=httpx.ConnectError("identity down"))
    monkeypatch.setattr("waki.apps.api.deps.auth.httpx.AsyncClient", identity)
    app.dependency_overrides.pop(get_current_user_id)
    app.dependency_overrides[get_settings] = lambda: AppSettings(DEMO_MODE=True, DEMO_USER_ID="demo-user")

    response = client.get("/analytics/dashboard", headers={"Authorization": "Bearer tok-1"})

    assert response.status_code == 200
    assert app.state.journal.calls[0]["user_id"] == "demo-user"


def test_identity_outage_without_demo_mode_is_unauthenticated(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        "waki.apps.api.deps.auth.httpx.AsyncClient", _IdentityClient(error=httpx.ConnectError("down"))
    )
    app.dependency_overrides.pop(get_current_user_id)
    app.dependency_overrides[get_settings] = lambda: AppSettings(DEMO_MODE=False)

    assert client.get("/analytics/dashboard", headers={"Authorization": "Bearer tok-1"}).status_code == 401


def test_run_serves_app_with_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr("uvicorn.run", lambda *args, **kwargs: calls.append((args, kwargs)))
    monkeypatch.setattr(
        api_main, "get_settings", lambda: AppSettings(HOST="127.0.0.1", PORT=9100, ENVIRONMENT="production")
    )

    api_main.run()

    assert calls == [(("waki.apps.api.main:app",), {"host": "127.0.0.1", "port": 9100, "reload": False})]
