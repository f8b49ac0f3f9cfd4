import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ALGORITHM"] = "HS256"
os.environ["OPENAI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_ai_judge
from app.core.scoring.ai_judge import JudgeOutcome, JudgeVerdict
from app.db.base import get_db
from app.main import app
from app.models import AssessmentInvitation, AssessmentTest, Base

EMPLOYEE_ID = 7


class StubJudge:
    """Judge returning a fixed verdict and recording its calls."""

    def __init__(self, verdict=None):
        self.verdict = verdict or JudgeVerdict(outcome=JudgeOutcome.OK, score=80, feedback="Good answer.")
        self.calls = []

    async def judge(self, question_text, answer_text):
        self.calls.append((question_text, answer_text))
        return self.verdict


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def stub_judge():
    return StubJudge()


@pytest.fixture
def client(session_factory, stub_judge):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_judge] = lambda: stub_judge
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = jwt.encode({"sub": str(EMPLOYEE_ID)}, "test-secret", algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_test(db):
    def _make_test(sections=None, passing_score=None, name="Backend Screening", created_by=EMPLOYEE_ID):
        test = AssessmentTest(
            name=name,
            passing_score=passing_score,
            sections=sections if sections is not None else [],
            created_by=created_by,
        )
        db.add(test)
        db.commit()
        db.refresh(test)
        return test
    return _make_test


@pytest.fixture
def make_invitation(db):
    def _make_invitation(test, email="jane.doe@x.com", token=None, student_id=None, candidate_id=None):
        invitation = AssessmentInvitation(
            test_id=test.id,
            email=email,
            token=token or f"tok-{test.id}-{email}",
            status="Pending",
            created_by=test.created_by,
            student_id=student_id,
            candidate_id=candidate_id,
        )
        db.add(invitation)
        db.commit()
        db.refresh(invitation)
        return invitation
    return _make_invitation
