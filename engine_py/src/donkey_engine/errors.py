# engine_py/src/donkey_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    code = "GAME_ERROR"

    def __init__(self, message: str, code: str = None):
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(f"[{self.code}] {message}")


# Specific error codes
ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
GAME_ALREADY_STARTED = "GAME_ALREADY_STARTED"
ROOM_FULL = "ROOM_FULL"
NOT_HOST = "NOT_HOST"
NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
INVALID_CARD_SELECTION = "INVALID_CARD_SELECTION"
GAME_NOT_STARTED = "GAME_NOT_STARTED"


class RoomNotFound(GameError):
    code = ROOM_NOT_FOUND

    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found")


class GameAlreadyStarted(GameError):
    code = GAME_ALREADY_STARTED


class RoomFull(GameError):
    code = ROOM_FULL


class NotHost(GameError):
    code = NOT_HOST


class NotEnoughPlayers(GameError):
    code = NOT_ENOUGH_PLAYERS


class NotYourTurn(GameError):
    code = NOT_YOUR_TURN


class InvalidCardSelection(GameError):
    code = INVALID_CARD_SELECTION


class GameNotStarted(GameError):
    code = GAME_NOT_STARTED
