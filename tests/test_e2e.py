import uuid
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.user import User
from app.models.task import Task


class TestE2E:
    def test_complete_user_journey(self, client: TestClient, db: Session):
        # 1. Registration
        email = f"user_{uuid.uuid4().hex[:8]}@example.com"
        password = "SecurePass123!"

        r = client.post("/register", json={"password": password})
        assert r.status_code == 400

        r = client.post("/register", json={"email": email, "password": password})
        assert r.status_code == 201
        assert db.query(User).filter(User.email == email).count() == 1

        r = client.post("/register", json={"email": email, "password": "OtherPass123!"})
        assert r.status_code == 400
        assert "exists" in r.json()["detail"].lower()

        # 2. Login
        r = client.post("/login", json={"email": email, "password": "WrongPass123!"})
        assert r.status_code == 401

        r = client.post("/login", json={"email": email, "password": password})
        assert r.status_code == 200
        assert r.json()["email"] == email
        headers = {"Authorization": f"Bearer {r.json()['token']}"}

        # 3. Tasks
        r = client.post("/tasks", json={"text": "Test Task", "priority": "low"})
        assert r.status_code == 401

        r = client.post("/tasks", json={"text": "Test Task", "priority": "low"},
                        headers={"Authorization": "Bearer invalid"})
        assert r.status_code == 403

        r = client.post("/tasks", json={"text": "My first task", "priority": "medium", "due_date": "2031-05-01"},
                        headers=headers)
        assert r.status_code == 201
        task_id = r.json()["id"]

        r = client.get("/tasks", headers=headers)
        assert r.status_code == 200
        tasks = r.json()
        assert len(tasks) == 1
        assert tasks[0]["id"] == task_id
        assert tasks[0]["text"] == "My first task"

        r = client.put(f"/tasks/{task_id}", json={"completed": True}, headers=headers)
        assert r.status_code == 200
        assert r.json()["completed"] is True

        # 4. Isolation
        other_email = f"other_{uuid.uuid4().hex[:8]}@example.com"
        assert client.post("/register", json={"email": other_email, "password": "OtherPass123!"}).status_code == 201
        r = client.post("/login", json={"email": other_email, "password": "OtherPass123!"})
        other_headers = {"Authorization": f"Bearer {r.json()['token']}"}

        r = client.get("/tasks", headers=other_headers)
        assert r.status_code == 200
        assert r.json() == []

        r = client.delete(f"/tasks/{task_id}", headers=other_headers)
        assert r.status_code == 403

        # 5. Cleanup
        r = client.delete(f"/tasks/{task_id}", headers=headers)
        assert r.status_code == 200

        r = client.get("/tasks", headers=headers)
        assert r.status_code == 200
        assert r.json() == []

    def test_concurrent_operations(self, client: TestClient, db: Session):
        import concurrent.futures

        email = f"test_{uuid.uuid4().hex[:8]}@example.com"
        assert client.post("/register", json={"email": email, "password": "Pass123!"}).status_code == 201
        r = client.post("/login", json={"email": email, "password": "Pass123!"})
        headers = {"Authorization": f"Bearer {r.json()['token']}"}

        def create_task(i):
            return client.post("/tasks", json={"text": f"Concurrent Task {i}", "priority": "low"}, headers=headers)

        with concurrent.futures.ThreadPoolExecutor(max_workers=3) as executor:
            futures = [executor.submit(create_task, i) for i in range(5)]
            responses = [f.result() for f in futures]

        assert all(r.status_code == 201 for r in responses)

        r = client.get("/tasks", headers=headers)
        assert r.status_code == 200
        tasks = r.json()
        assert len({task["text"] for task in tasks}) == 5

        user = db.query(User).filter(User.email == email).one()
        assert db.query(Task).filter(Task.user_id == user.id).count() == 5
