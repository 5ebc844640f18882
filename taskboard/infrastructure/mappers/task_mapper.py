"""
Task mapper for converting between domain entities and database models.
"""

from taskboard.domain.models.task import Task, TaskPriority
from taskboard.infrastructure.db.models import TaskModel
from taskboard.infrastructure.mappers.comment_mapper import CommentMapper, AttachmentMapper


class TaskMapper:
    """Maps between Task domain entity and TaskModel database model."""

    def __init__(self):
        self.comment_mapper = CommentMapper()
        self.attachment_mapper = AttachmentMapper()

    def domain_to_model(self, task: Task) -> TaskModel:
        """Convert Task domain entity to TaskModel."""
        return TaskModel(
            id=task.id,
            column_id=task.column_id,
            created_by_id=task.created_by_id,
            assigned_user_id=task.assigned_user_id,
            title=task.title,
            description=task.description,
            position=task.order,
            priority=task.priority,
            due_date=task.due_date,
            completed_at=task.completed_at,
            created_at=task.created_at,
            updated_at=task.updated_at
        )

    def model_to_domain(self, model: TaskModel, with_details: bool = False) -> Task:
        """
        Convert TaskModel to Task domain entity.
        Label ids are always filled in; comments and attachments only on request.
        """
        task = Task(
            id=model.id,
            title=model.title,
            column_id=model.column_id,
            created_by_id=model.created_by_id,
            description=model.description,
            order=model.position,
            priority=TaskPriority(model.priority) if model.priority else TaskPriority.MEDIUM,
            due_date=model.due_date,
            completed_at=model.completed_at,
            assigned_user_id=model.assigned_user_id,
            label_ids=[link.label_id for link in model.task_labels],
            created_at=model.created_at,
            updated_at=model.updated_at
        )

        if with_details:
            task.comments = [
                self.comment_mapper.model_to_domain(comment)
                for comment in model.comments
                if comment.deleted_at is None
            ]
            task.attachments = [
                self.attachment_mapper.model_to_domain(attachment)
                for attachment in model.attachments
            ]

        return task

    def update_model(self, model: TaskModel, task: Task) -> None:
        """Copy mutable fields from the entity onto an existing row."""
        model.column_id = task.column_id
        model.position = task.order
        model.assigned_user_id = task.assigned_user_id
        model.title = task.title
        model.description = task.description
        model.priority = task.priority
        model.due_date = task.due_date
        model.completed_at = task.completed_at
        model.updated_at = task.updated_at
