import sys
from pathlib import Path
from tempfile import TemporaryDirectory

# ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient
from app.main import app
from app.client.api import ApiError, TaskApiClient
from app.client.controller import TaskListController
from app.client.session import SessionStore

email = "quick_test_user@example.com"
password = "correct_horse_battery_staple"

with TemporaryDirectory() as tmp:
    api = TaskApiClient(TestClient(app), SessionStore(Path(tmp) / "session.json"))
    try:
        api.register(email, password)
        print("registered", email)
    except ApiError as e:
        print("register:", e)
    api.login(email, password)

    ui = TaskListController(api, confirm=lambda msg: True, alert=print)
    ui.start()
    ui.dispatch("submit", text="quick post", priority="high")
    print(ui.count_text)
    print(ui.html)
