import asyncio
import threading
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

import orjson
from aiohttp import web


class RecordedRequest(NamedTuple):
    method: str
    path: str
    raw_path: str
    query: Dict[str, str]
    json: Any
    headers: Dict[str, str]


Responder = Callable[[RecordedRequest], Tuple[int, Any]]


class StubLibraryServer:
    """An aiohttp server on a background thread that answers from a table of canned responses.

    Requests that match no entry get a 404 with a structured error body.
    """

    def __init__(self):
        self.requests: List[RecordedRequest] = []
        self._responses: Dict[Tuple[str, str], List[Union[Tuple[int, Any], Responder]]] = {}
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._loop.run_forever, daemon=True)
        self._runner: Optional[web.AppRunner] = None
        self.url: Optional[str] = None

    def respond(self, method: str, path: str, status: int, payload: Any = None):
        self._responses.setdefault((method, path), []).append((status, payload))

    def respond_with(self, method: str, path: str, responder: Responder):
        self._responses.setdefault((method, path), []).append(responder)

    def echo(self, method: str, path: str, status: int = 201):
        self.respond_with(method, path, lambda request: (status, {'data': {**request.json, 'id': 'f' * 24}}))

    def requests_to(self, method: str, path: str) -> List[RecordedRequest]:
        return [r for r in self.requests if r.method == method and r.path == path]

    async def _handle(self, request: web.Request) -> web.Response:
        body = await request.read()
        recorded = RecordedRequest(
            method=request.method,
            path=request.path,
            raw_path=request.raw_path,
            query=dict(request.query),
            json=orjson.loads(body) if body else None,
            headers=dict(request.headers),
        )
        self.requests.append(recorded)

        responses = self._responses.get((request.method, request.path))
        if not responses:
            error = {'error': {'code': 404, 'message': f'no stub for {request.method} {request.path}'}}
            return web.Response(status=404, body=orjson.dumps(error), content_type='application/json')

        # the last canned response is sticky
        response = responses.pop(0) if len(responses) > 1 else responses[0]
        if callable(response):
            status, payload = response(recorded)
        else:
            status, payload = response
        if payload is None:
            return web.Response(status=status)
        if isinstance(payload, bytes):
            return web.Response(status=status, body=payload, content_type='application/json')
        return web.Response(status=status, body=orjson.dumps(payload), content_type='application/json')

    async def _start(self):
        app = web.Application()
        app.router.add_route('*', '/{tail:.*}', self._handle)
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, '127.0.0.1', 0)
        await site.start()
        host, port = self._runner.addresses[0][:2]
        self.url = f'http://{host}:{port}'

    def start(self):
        self._thread.start()
        asyncio.run_coroutine_threadsafe(self._start(), self._loop).result()

    def stop(self):
        if self._runner is not None:
            asyncio.run_coroutine_threadsafe(self._runner.cleanup(), self._loop).result()
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()
