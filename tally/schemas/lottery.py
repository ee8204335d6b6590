"""Schemas for the lottery API.

Shape checks only; the 6-distinct-numbers rule lives in the service so it
applies to every caller.
"""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


class LotteryTicketSchema(Schema):
    id = fields.Int(required=True)
    owner = fields.Str(required=True)
    numbers = fields.List(fields.Int(), required=True)
    created_at = fields.Int(required=True)
    updated_at = fields.Int(allow_none=True)


class TicketCreateSchema(Schema):
    owner = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    numbers = fields.List(fields.Int(strict=True), required=True)


class TicketUpdateSchema(Schema):
    owner = fields.Str(required=False, load_default=None, validate=validate.Length(min=1, max=200))
    numbers = fields.List(fields.Int(strict=True), required=False, load_default=None)

    @validates_schema
    def _validate_not_empty(self, data, **kwargs):  # type: ignore[no-untyped-def]
        if data.get("owner") is None and data.get("numbers") is None:
            raise ValidationError({"_schema": ["Provide owner and/or numbers"]})


class TicketListQuerySchema(Schema):
    owner = fields.Str(required=False, load_default=None)


class LotteryDrawSchema(Schema):
    id = fields.Int(required=True)
    winning_numbers = fields.List(fields.Int(), required=True)
    draw_time = fields.Int(required=True)
    participants = fields.List(fields.Str(), required=True)


class DrawCreateSchema(Schema):
    winning_numbers = fields.List(fields.Int(strict=True), required=True)


class ParticipateSchema(Schema):
    ticket_id = fields.Int(required=True, strict=True, validate=validate.Range(min=1))
