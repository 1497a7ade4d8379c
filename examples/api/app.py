"""API — JSON items resource behind an origin allow-list.

Demonstrates a decorated controller with a group prefix, path
placeholders passed positionally, request.json() for POST/PUT, and the
CORS gate: browsers on https://app.example may read and write, anyone
else may only read.

Serve with any ASGI server:
    cd examples/api && uvicorn app:router
"""

import threading
from dataclasses import asdict, dataclass

from waypost import Router, RouterConfig
from waypost.errors import NotFound
from waypost.routing.declarations import delete, get, post, put, route_group

router = Router(
    RouterConfig(
        allowed_origins={
            "*": ["GET"],
            "https://app.example": ["GET", "POST", "PUT", "DELETE"],
        },
    )
)


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Item:
    id: int
    title: str
    done: bool


_items: dict[int, Item] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return n


def _not_found(response, item_id: str) -> None:
    error = NotFound(f"No item {item_id}")
    response.with_status(error.status).with_json(error.to_payload())


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@route_group("/items")
class ItemController:
    @get("/")
    def index(self, request, response):
        with _lock:
            items = [asdict(item) for item in _items.values()]
        response.with_json(items)

    @post("/")
    async def create(self, request, response):
        data = await request.json()
        item = Item(id=_get_next_id(), title=data.get("title", ""), done=False)
        with _lock:
            _items[item.id] = item
        response.with_status(201).with_json(asdict(item))

    @get("/{id}")
    def show(self, request, response, item_id):
        item = _items.get(int(item_id)) if item_id.isdigit() else None
        if item is None:
            _not_found(response, item_id)
            return
        response.with_json(asdict(item))

    @put("/{id}")
    async def update(self, request, response, item_id):
        data = await request.json()
        with _lock:
            item = _items.get(int(item_id)) if item_id.isdigit() else None
            if item is None:
                _not_found(response, item_id)
                return
            item = Item(
                id=item.id,
                title=data.get("title", item.title),
                done=data.get("done", item.done),
            )
            _items[item.id] = item
        response.with_json(asdict(item))

    @delete("/{id}")
    def destroy(self, request, response, item_id):
        with _lock:
            item = _items.pop(int(item_id), None) if item_id.isdigit() else None
        if item is None:
            _not_found(response, item_id)
            return
        response.with_status(204)


router.include(ItemController)


@router.get("/health")
def health(request, response):
    response.with_json({"status": "ok"})
