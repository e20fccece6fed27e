from fastapi import APIRouter, Request

from app.Http.DTOs.schemas import LauncherEntry, LauncherResponse

router = APIRouter(tags=["Launcher"])

# role, label, [(rel, path, method)]
_ENTRIES = [
    ("customer", "Customer", [("login", "/customers/login", "POST"), ("register", "/customers", "POST")]),
    ("barber", "Barber", [("login", "/customers/login", "POST"), ("workbench", "/barbers/{name}/appointments", "GET")]),
    ("admin", "Administrator", [("login", "/customers/login", "POST")]),
    ("guest", "Browse as guest", [("queue", "/queue/today", "GET"), ("saturation", "/saturation", "GET")]),
    ("monitor", "Monitor screen", [("queue", "/queue/today", "GET"), ("realtime", "/ws/appointments", "WEBSOCKET")]),
]


@router.get(
    "/launcher",
    response_model=LauncherResponse,
    response_model_by_alias=True,
    summary="Role launcher",
    description="Entry points for each role, as links the client can follow.",
)
async def launcher(request: Request):
    base = str(request.base_url).rstrip("/")
    entries = []
    for role, label, links in _ENTRIES:
        entry = LauncherEntry(role=role, label=label)
        for rel, path, method in links:
            href = f"{base.replace('http', 'ws', 1)}{path}" if method == "WEBSOCKET" else f"{base}{path}"
            entry.add_link(rel, href, method)
        entries.append(entry)
    return LauncherResponse(entries=entries)
