from cardbinder.db.database import get_session, init_db
from cardbinder.db.operations import (
    card_to_model,
    create_card,
    delete_card,
    get_card,
    list_cards,
    set_card_images,
    update_card,
)

__all__ = [
    "card_to_model",
    "create_card",
    "delete_card",
    "get_card",
    "get_session",
    "init_db",
    "list_cards",
    "set_card_images",
    "update_card",
]
