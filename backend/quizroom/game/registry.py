from __future__ import annotations

import logging
from threading import Lock

from .codes import generate_room_code, normalize_room_code
from .errors import ErrorKind, GameError
from .models import Departure, PlayerState, Room
from .questions import QuestionSource, default_questions

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 24


class RoomRegistry:
    """In-memory map of live rooms keyed by uppercase room code.

    ``_lock`` guards the map only. It is never held together with a room's
    own lock, so work in one room never blocks lookups of another.
    """

    def __init__(
        self,
        question_source: QuestionSource = default_questions,
        max_create_attempts: int = 10,
    ) -> None:
        self._question_source = question_source
        self._max_create_attempts = max(1, max_create_attempts)
        self._lock = Lock()
        self._rooms: dict[str, Room] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def codes(self) -> set[str]:
        with self._lock:
            return set(self._rooms)

    def list_rooms(self) -> list[Room]:
        with self._lock:
            return list(self._rooms.values())

    def create_room(self, host_connection_id: str) -> Room:
        for _ in range(self._max_create_attempts):
            code = generate_room_code(self.codes())
            room = Room(
                code=code,
                host_connection_id=host_connection_id,
                questions=tuple(self._question_source()),
            )
            with self._lock:
                if code not in self._rooms:
                    self._rooms[code] = room
                    break
            logger.debug("Room code %s taken by a concurrent create, retrying", code)
        else:
            raise RuntimeError(
                f"could not allocate a room code in {self._max_create_attempts} attempts"
            )

        logger.info("Room %s created by %s", room.code, host_connection_id)
        return room

    def get_room(self, code: str) -> Room | None:
        with self._lock:
            return self._rooms.get(normalize_room_code(code))

    def require_room(self, code: str) -> Room:
        room = self.get_room(code)
        if room is None:
            raise GameError(ErrorKind.ROOM_NOT_FOUND)
        return room

    def remove_room(self, code: str) -> bool:
        with self._lock:
            room = self._rooms.pop(normalize_room_code(code), None)
        if room is None:
            return False
        logger.info("Room %s removed", room.code)
        return True

    def join_room(self, code: str, connection_id: str, name: str) -> PlayerState:
        room = self.require_room(code)

        name = (name or "").strip()
        if not 1 <= len(name) <= MAX_NAME_LENGTH:
            raise GameError(ErrorKind.INVALID_NAME, f"Name must be 1-{MAX_NAME_LENGTH} characters")

        # Name check and insert must be one step, otherwise two concurrent
        # joins can both see the name as free.
        with room.lock:
            lowered = name.lower()
            if any(p.name.lower() == lowered for p in room.players.values()):
                raise GameError(ErrorKind.NAME_TAKEN)
            if connection_id in room.players:
                raise GameError(ErrorKind.ALREADY_IN_ROOM)

            player = PlayerState(connection_id=connection_id, name=name)
            room.players[connection_id] = player

        logger.info("Player '%s' joined room %s", name, room.code)
        return player

    def leave_room(self, connection_id: str) -> list[Departure]:
        """Drop a connection from every room it belongs to.

        A host leaving closes its room outright; there is no host transfer.
        """
        departures: list[Departure] = []
        for room in self.list_rooms():
            if room.host_connection_id == connection_id:
                self.remove_room(room.code)
                departures.append(Departure(code=room.code, room_closed=True))
                continue

            with room.lock:
                player = room.players.pop(connection_id, None)
            if player is not None:
                logger.info("Player '%s' left room %s", player.name, room.code)
                departures.append(Departure(code=room.code, room_closed=False))

        return departures
