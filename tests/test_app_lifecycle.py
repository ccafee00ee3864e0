from fastapi.testclient import TestClient

from playpulse.config import Settings
from playpulse.database import Database
from playpulse.main import create_app


class ClosingCollaborator:
    def __init__(self):
        self.closed = 0

    def close(self):
        self.closed += 1


def test_shutdown_closes_mailer_and_gateway(tmp_path):
    url = f"sqlite:///{tmp_path / 'lifecycle.db'}"
    mailer = ClosingCollaborator()
    gateway = ClosingCollaborator()
    app = create_app(
        Settings(DATABASE_URL=url, UPLOAD_DIR=str(tmp_path / "uploads")),
        database=Database(url),
        mailer=mailer,
        payment_gateway=gateway,
    )

    with TestClient(app) as client:
        assert client.get("/api/health").json()["status"] == "ok"
        assert (mailer.closed, gateway.closed) == (0, 0)

    assert (mailer.closed, gateway.closed) == (1, 1)
