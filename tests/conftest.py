"""
Shared fixtures: an in-memory database per test, repositories bound to it
and an HTTP client whose requests use the same database.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
import pytest_asyncio
from sqlalchemy.orm import sessionmaker

from taskboard.application.dto.board_dto import CreateBoardRequestDTO
from taskboard.application.dto.user_dto import CreateUserRequestDTO
from taskboard.application.use_cases.board_use_cases import CreateBoardUseCase
from taskboard.application.use_cases.user_use_cases import CreateUserUseCase
from taskboard.infrastructure.db.database import build_engine, create_all_tables, get_db
from taskboard.infrastructure.web.dependencies import get_repositories


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with every table created."""
    engine = build_engine("sqlite://")
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repos(session):
    """Every repository plus the transaction manager, sharing one session."""
    return get_repositories(session)


async def create_user(repos, user_name: str = "alice", email: str = None):
    result = await CreateUserUseCase(repos.users, repos.transaction_manager).execute(
        CreateUserRequestDTO(email=email or f"{user_name}@example.com", user_name=user_name)
    )
    assert result.success, result.error
    return result.data


async def create_board(repos, owner_id: str, title: str = "Roadmap",
                       column_titles=("To Do", "In Progress", "Done")):
    use_case = CreateBoardUseCase(
        repos.boards,
        repos.columns,
        repos.labels,
        repos.users,
        repos.activity,
        repos.transaction_manager,
        default_column_titles=list(column_titles)
    ).set_current_user(owner_id)
    result = await use_case.execute(CreateBoardRequestDTO(title=title))
    assert result.success, result.error
    return result.data


async def create_task(repos, user_id: str, column_id: str, title: str, order=None):
    from taskboard.application.dto.task_dto import CreateTaskRequestDTO
    from taskboard.application.use_cases.task_use_cases import CreateTaskUseCase

    use_case = CreateTaskUseCase(
        repos.tasks,
        repos.columns,
        repos.boards,
        repos.users,
        repos.activity,
        repos.transaction_manager
    ).set_current_user(user_id)
    return await use_case.execute(CreateTaskRequestDTO(column_id=column_id, title=title, order=order))


@pytest.fixture
def make_user(repos):
    async def _make(user_name: str):
        return await create_user(repos, user_name)
    return _make


@pytest.fixture
def make_board(repos):
    async def _make(owner_id: str, title: str = "Roadmap", column_titles=("To Do", "In Progress", "Done")):
        return await create_board(repos, owner_id, title, column_titles)
    return _make


@pytest.fixture
def make_task(repos):
    """Create a task through the use case; returns the UseCaseResult."""
    async def _make(user_id: str, column_id: str, title: str, order=None):
        return await create_task(repos, user_id, column_id, title, order)
    return _make


@pytest_asyncio.fixture
async def owner(repos):
    return await create_user(repos, "alice")


@pytest_asyncio.fixture
async def board(repos, owner):
    """Board owned by ``owner`` with the columns To Do, In Progress and Done."""
    return await create_board(repos, owner.id)


@pytest_asyncio.fixture
async def columns(repos, board):
    """The board's columns in ascending order."""
    return await repos.columns.find_by_board(board.id)


@pytest.fixture
def client(session_factory):
    """HTTP client whose requests run against the test database."""
    from fastapi.testclient import TestClient
    from taskboard.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
