# Client -> server
ROOM_CREATE = "room:create"
ROOM_JOIN = "room:join"
ROOM_END = "room:end"
GAME_START = "game:start"
GAME_REVEAL = "game:reveal"
GAME_NEXT = "game:next"
ANSWER_SUBMIT = "answer:submit"

# Server -> client
ROOM_CREATED = "room:created"
ROOM_JOINED = "room:joined"
ROOM_CLOSED = "room:closed"
ROOM_ERROR = "room:error"
GAME_ERROR = "game:error"
PLAYERS_UPDATED = "players:updated"
QUESTION_STARTED = "question:started"
ANSWER_ACCEPTED = "answer:accepted"
ROUND_ENDED = "round:ended"
GAME_ENDED = "game:ended"
