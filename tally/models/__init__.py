"""ORM models."""

from tally.models.counter import IdCounter
from tally.models.lottery_draw import LotteryDraw
from tally.models.lottery_ticket import LotteryTicket
from tally.models.vote import Vote

# Every keyed record family; the table name doubles as the counter family.
RECORD_MODELS = (Vote, LotteryTicket, LotteryDraw)

__all__ = ["IdCounter", "LotteryDraw", "LotteryTicket", "RECORD_MODELS", "Vote"]
