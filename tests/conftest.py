import pytest

from dottrack.models import Attempt


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_dottrack.db")
    return db_path


@pytest.fixture
def make_attempt():
    def _make(unit_id="u1", question_index=1, status="correct", timestamp=0, date_str="2024-01-01"):
        return Attempt(
            project_id="p1", unit_id=unit_id, question_index=question_index,
            status=status, timestamp=timestamp, date_str=date_str,
        )
    return _make
