import os
import tempfile
import uuid

# Must run before db.py / deps/auth.py are imported: both read env at import time.
_TMP = tempfile.mkdtemp(prefix="tracker-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["TRACKER_API_KEY"] = "test-key"
os.environ["ADMIN_TOKEN"] = "test-admin"

import pytest  # noqa: E402

from db import Base, engine  # noqa: E402
import models  # noqa: E402,F401

Base.metadata.create_all(engine)


@pytest.fixture
def headers():
    """Client credentials for a fresh user, so tests never share rows."""
    return {"x-api-key": "test-key", "x-user-id": f"user-{uuid.uuid4().hex[:12]}"}
