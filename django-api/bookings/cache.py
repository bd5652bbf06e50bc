"""Cache keys for the room catalog."""

ROOM_LIST_KEY = "rooms:list"


def room_detail_key(room_id: str) -> str:
    return f"rooms:{room_id}"
