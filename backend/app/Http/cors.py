from fastapi.responses import PlainTextResponse

# Headers sent by the edge relays on every response, including preflight.
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS, GET",
    "Access-Control-Allow-Private-Network": "true",
}


def preflight_response() -> PlainTextResponse:
    return PlainTextResponse("ok", headers=CORS_HEADERS)
