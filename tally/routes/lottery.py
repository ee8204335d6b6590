"""Lottery routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from tally.db import get_session
from tally.schemas.lottery import (
    DrawCreateSchema,
    LotteryDrawSchema,
    LotteryTicketSchema,
    ParticipateSchema,
    TicketCreateSchema,
    TicketListQuerySchema,
    TicketUpdateSchema,
)
from tally.services.registry import get_services
from tally.utils.responses import ok

lottery_bp = Blueprint("lottery", __name__)

_ticket_schema = LotteryTicketSchema()
_tickets_schema = LotteryTicketSchema(many=True)
_draw_schema = LotteryDrawSchema()
_draws_schema = LotteryDrawSchema(many=True)
_ticket_create_schema = TicketCreateSchema()
_ticket_update_schema = TicketUpdateSchema()
_ticket_query_schema = TicketListQuerySchema()
_draw_create_schema = DrawCreateSchema()
_participate_schema = ParticipateSchema()


@lottery_bp.post("/tickets")
def buy_ticket():
    payload = request.get_json(silent=True) or {}
    data = _ticket_create_schema.load(payload)

    ticket = get_services().lottery.buy_ticket(get_session(), data["owner"], data["numbers"])
    return ok(_ticket_schema.dump(ticket), status_code=201)


@lottery_bp.get("/tickets")
def list_tickets():
    """All tickets (404 when none exist), or one owner's tickets."""

    args = _ticket_query_schema.load(request.args.to_dict())
    service = get_services().lottery

    if args["owner"] is not None:
        tickets = service.get_tickets_by_owner(get_session(), args["owner"])
    else:
        tickets = service.get_all_tickets(get_session())
    return ok(_tickets_schema.dump(tickets))


@lottery_bp.delete("/tickets")
def clear_tickets():
    return ok({"removed": get_services().lottery.clear_tickets(get_session())})


@lottery_bp.get("/tickets/<int:ticket_id>")
def check_ticket(ticket_id: int):
    ticket = get_services().lottery.check_ticket(get_session(), ticket_id)
    return ok(_ticket_schema.dump(ticket))


@lottery_bp.put("/tickets/<int:ticket_id>")
def update_ticket(ticket_id: int):
    payload = request.get_json(silent=True) or {}
    data = _ticket_update_schema.load(payload)

    ticket = get_services().lottery.update_ticket(
        get_session(), ticket_id, owner=data["owner"], numbers=data["numbers"]
    )
    return ok(_ticket_schema.dump(ticket))


@lottery_bp.delete("/tickets/<int:ticket_id>")
def delete_ticket(ticket_id: int):
    ticket = get_services().lottery.delete_ticket(get_session(), ticket_id)
    return ok(_ticket_schema.dump(ticket))


@lottery_bp.post("/draws")
def conduct_draw():
    payload = request.get_json(silent=True) or {}
    data = _draw_create_schema.load(payload)

    draw = get_services().lottery.conduct_draw(get_session(), data["winning_numbers"])
    return ok(_draw_schema.dump(draw), status_code=201)


@lottery_bp.get("/draws")
def list_draws():
    draws = get_services().lottery.get_all_draws(get_session())
    return ok(_draws_schema.dump(draws))


@lottery_bp.delete("/draws")
def clear_draws():
    return ok({"removed": get_services().lottery.clear_draws(get_session())})


@lottery_bp.get("/draws/<int:draw_id>")
def get_draw(draw_id: int):
    draw = get_services().lottery.get_draw(get_session(), draw_id)
    return ok(_draw_schema.dump(draw))


@lottery_bp.delete("/draws/<int:draw_id>")
def delete_draw(draw_id: int):
    draw = get_services().lottery.delete_draw(get_session(), draw_id)
    return ok(_draw_schema.dump(draw))


@lottery_bp.post("/draws/<int:draw_id>/participants")
def participate_in_draw(draw_id: int):
    payload = request.get_json(silent=True) or {}
    data = _participate_schema.load(payload)

    draw = get_services().lottery.participate_in_draw(get_session(), data["ticket_id"], draw_id)
    return ok(_draw_schema.dump(draw))
