"""Marshmallow schemas for Vote."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class VoteSchema(Schema):
    """Serialize Vote."""

    id = fields.Int(required=True)
    candidate = fields.Str(required=True)
    voter = fields.Str(required=True)
    timestamp = fields.Int(required=True)
    created_at = fields.Int(required=True)


class VoteWriteSchema(Schema):
    """Validate create/update Vote payload."""

    candidate = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    voter = fields.Str(required=True, validate=validate.Length(min=1, max=200))


class TimeRangeSchema(Schema):
    start = fields.Int(required=True, validate=validate.Range(min=0))
    end = fields.Int(required=True, validate=validate.Range(min=0))


class VoteListQuerySchema(Schema):
    candidate = fields.Str(required=False, load_default=None)
    voter = fields.Str(required=False, load_default=None)
    sort = fields.Str(required=False, load_default=None, validate=validate.OneOf(["timestamp"]))
    order = fields.Str(required=False, load_default="asc", validate=validate.OneOf(["asc", "desc"]))
