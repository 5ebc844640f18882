#!/usr/bin/env python3
"""
Database management script for the task board backend.
Handles migrations, table creation and demo data seeding.
"""

import sys
import asyncio
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from alembic.config import Config
from alembic import command

from taskboard.config import settings
from taskboard.infrastructure.db.database import (
    SessionLocal,
    SQLAlchemyTransactionManager,
    create_all_tables,
    drop_all_tables
)

MIGRATIONS_DIR = Path(__file__).parent / "taskboard" / "infrastructure" / "db" / "migrations"


def get_alembic_config() -> Config:
    """Build the Alembic configuration for the configured database."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return alembic_cfg


def create_migration(message: str = "Auto-generated migration"):
    """Create a new migration."""
    print(f"Creating migration: {message}")
    command.revision(get_alembic_config(), message=message, autogenerate=True)


def run_migrations():
    """Run pending migrations."""
    print("Running migrations...")
    command.upgrade(get_alembic_config(), "head")


def rollback_migration():
    """Rollback last migration."""
    print("Rolling back migration...")
    command.downgrade(get_alembic_config(), "-1")


def reset_database():
    """Reset database - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        alembic_cfg = get_alembic_config()
        print("Resetting database...")
        command.downgrade(alembic_cfg, "base")
        command.upgrade(alembic_cfg, "head")
    else:
        print("Database reset cancelled.")


def show_current_revision():
    """Show current database revision."""
    command.current(get_alembic_config())


def show_history():
    """Show migration history."""
    command.history(get_alembic_config())


def create_tables():
    """Create missing tables straight from the models, without migrations."""
    print("Creating tables...")
    create_all_tables()


def drop_tables():
    """Drop every table - WARNING: This will drop all data!"""
    response = input("This will drop ALL tables. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        drop_all_tables()
        print("Tables dropped.")
    else:
        print("Drop cancelled.")


async def _seed() -> None:
    from taskboard.application.dto.user_dto import CreateUserRequestDTO
    from taskboard.application.dto.board_dto import CreateBoardRequestDTO, BoardIdRequestDTO
    from taskboard.application.dto.task_dto import CreateTaskRequestDTO
    from taskboard.application.use_cases.user_use_cases import CreateUserUseCase
    from taskboard.application.use_cases.board_use_cases import CreateBoardUseCase, GetBoardDetailsUseCase
    from taskboard.application.use_cases.task_use_cases import CreateTaskUseCase
    from taskboard.infrastructure.repositories import (
        SQLAlchemyUserRepository,
        SQLAlchemyBoardRepository,
        SQLAlchemyColumnRepository,
        SQLAlchemyTaskRepository,
        SQLAlchemyLabelRepository,
        SQLAlchemyActivityLogRepository
    )

    session = SessionLocal()
    try:
        users = SQLAlchemyUserRepository(session)
        boards = SQLAlchemyBoardRepository(session)
        columns = SQLAlchemyColumnRepository(session)
        tasks = SQLAlchemyTaskRepository(session)
        labels = SQLAlchemyLabelRepository(session)
        activity = SQLAlchemyActivityLogRepository(session)
        transaction_manager = SQLAlchemyTransactionManager(session)

        user = await users.find_by_user_name("demo")
        if user:
            print(f"Demo user already exists ({user.id}), nothing to seed.")
            return

        result = await CreateUserUseCase(users, transaction_manager).execute(
            CreateUserRequestDTO(email="demo@example.com", user_name="demo", full_name="Demo User")
        )
        if not result.success:
            raise RuntimeError(f"Could not create demo user: {result.error}")
        user_id = result.data.id

        result = await CreateBoardUseCase(
            boards, columns, labels, users, activity, transaction_manager,
            default_color=settings.default_board_color,
            default_column_titles=settings.default_column_titles,
            create_default_labels=settings.create_default_labels
        ).set_current_user(user_id).execute(
            CreateBoardRequestDTO(title="Demo board", description="Sample board with a few tasks")
        )
        if not result.success:
            raise RuntimeError(f"Could not create demo board: {result.error}")

        details = await GetBoardDetailsUseCase(boards, columns, labels, users).execute(
            BoardIdRequestDTO(id=result.data.id)
        )
        if details.data.columns:
            first_column = details.data.columns[0]
            create_task = CreateTaskUseCase(
                tasks, columns, boards, users, activity, transaction_manager,
                append_retries=settings.append_conflict_retries
            ).set_current_user(user_id)
            for title in ("Write the project brief", "Set up the repository", "Plan the first sprint"):
                await create_task.execute(CreateTaskRequestDTO(column_id=first_column.id, title=title))

        print(f"Seeded demo user {user_id} with board {result.data.id}")
    finally:
        session.close()


def seed_database():
    """Create a demo user with a board and a few tasks."""
    asyncio.run(_seed())


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print("  create [msg]   - Create new migration")
        print("  migrate        - Run pending migrations")
        print("  rollback       - Rollback last migration")
        print("  reset          - Reset database (WARNING: drops all data)")
        print("  current        - Show current revision")
        print("  history        - Show migration history")
        print("  tables         - Create tables from the models")
        print("  drop           - Drop all tables (WARNING: drops all data)")
        print("  seed           - Create demo data")
        return

    command_name = sys.argv[1]

    if command_name == "create":
        message = " ".join(sys.argv[2:]) if len(sys.argv) > 2 else "Auto-generated migration"
        create_migration(message)
    elif command_name == "migrate":
        run_migrations()
    elif command_name == "rollback":
        rollback_migration()
    elif command_name == "reset":
        reset_database()
    elif command_name == "current":
        show_current_revision()
    elif command_name == "history":
        show_history()
    elif command_name == "tables":
        create_tables()
    elif command_name == "drop":
        drop_tables()
    elif command_name == "seed":
        seed_database()
    else:
        print(f"Unknown command: {command_name}")


if __name__ == "__main__":
    main()
