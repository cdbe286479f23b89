"""Task-related Marshmallow schemas."""

from marshmallow import EXCLUDE, Schema, fields

from tasklist.models import Priority, SortBy, SortDirection


class TaskSchema(Schema):
    """Schema for task serialization."""

    id = fields.Int(dump_only=True)
    title = fields.Str(dump_only=True)
    done = fields.Bool(dump_only=True)
    # None for labels outside the enumeration
    priority = fields.Enum(Priority, by_value=True, dump_only=True, allow_none=True)
    created_at = fields.DateTime(dump_only=True, format="iso")
    updated_at = fields.DateTime(dump_only=True, format="iso")


class TaskListQuerySchema(Schema):
    """Schema for listing query parameters (``?sortBy=priority&sortType=des``)."""

    class Meta:
        unknown = EXCLUDE

    sort_by = fields.Enum(SortBy, by_value=True, data_key="sortBy", load_default=SortBy.OLD)
    direction = fields.Enum(
        SortDirection, by_value=True, data_key="sortType", load_default=SortDirection.ASC
    )


class TaskListResponseSchema(Schema):
    """Schema for the JSON task listing."""

    tasks = fields.List(fields.Nested(TaskSchema))
    sort_by = fields.Enum(SortBy, by_value=True, data_key="sortBy")
    direction = fields.Enum(SortDirection, by_value=True, data_key="sortType")
