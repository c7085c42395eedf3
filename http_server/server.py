import asyncio
import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, unquote, urlparse

from .request import Request
from .response import Response

logger = logging.getLogger(__name__)

_PATH_PARAM = re.compile(r"^\{(\w+)\}$")


@dataclass
class Route:
    method: str
    path: str
    pattern: re.Pattern[str]
    handler: Callable

    def match(self, path: str) -> Optional[Dict[str, str]]:
        m = self.pattern.match(path)
        if m is None:
            return None
        return {name: unquote(value) for name, value in m.groupdict().items()}


def compile_path(path: str) -> re.Pattern[str]:
    """Turn '/items/{id}' into a regex with one named group per '{param}' segment."""
    segments = []
    for segment in path.split('/'):
        param = _PATH_PARAM.match(segment)
        if param:
            segments.append(f"(?P<{param.group(1)}>[^/]+)")
        else:
            segments.append(re.escape(segment))
    return re.compile('^' + '/'.join(segments) + '$')


class HTTPServer:
    STATUS_MESSAGES = {
        200: 'OK',
        201: 'Created',
        204: 'No Content',
        400: 'Bad Request',
        404: 'Not Found',
        405: 'Method Not Allowed',
        500: 'Internal Server Error',
    }

    def __init__(
        self,
        host: str = '0.0.0.0',
        port: int = 5000,
        max_body_bytes: int = 1024 * 1024,
        read_timeout: float = 5.0,
    ):
        if max_body_bytes <= 0:
            raise ValueError(f"max_body_bytes must be positive, got {max_body_bytes}")
        if read_timeout <= 0:
            raise ValueError(f"read_timeout must be positive, got {read_timeout}")

        self.host = host
        self.port = port
        self.max_body_bytes = max_body_bytes
        self.read_timeout = read_timeout
        self.routes: List[Route] = []

    def route(self, path: str, methods: Optional[List] = None):
        """Decorator for registering route handlers. Path segments like '{value}' are captured."""
        if methods is None:
            methods = ['GET']

        def decorator(handler):
            pattern = compile_path(path)
            for method in methods:
                self.routes.append(Route(method.upper(), path, pattern, handler))
            return handler
        return decorator

    def resolve(self, method: str, path: str) -> Tuple[Optional[Route], Dict[str, str], bool]:
        """
        Find the route for a request.

        Returns:
            (route, path_params, path_known). path_known is True when some route
            matches the path under a different method.
        """
        path_known = False
        for route in self.routes:
            params = route.match(path)
            if params is None:
                continue
            if route.method == method:
                return route, params, True
            path_known = True
        return None, {}, path_known

    async def parse_request(self, reader: asyncio.StreamReader) -> Optional[Request]:
        """Parse HTTP request with timeout and size limits"""
        try:
            request_line = await asyncio.wait_for(reader.readline(), timeout=self.read_timeout)

            if not request_line:
                return None

            request_line = request_line.decode('utf-8').strip()
            method, full_path, version = request_line.split(' ', 2)

            parsed_url = urlparse(full_path)
            path = parsed_url.path
            query_params = parse_qs(parsed_url.query)

            headers = {}
            while True:
                line = await asyncio.wait_for(reader.readline(), timeout=self.read_timeout)
                if line in (b'\r\n', b'\n', b''):
                    break

                header_line = line.decode('utf-8').strip()
                if ':' in header_line:
                    key, value = header_line.split(':', 1)
                    headers[key.strip().lower()] = value.strip()

            body = b''
            content_length = int(headers.get('content-length', 0))

            if content_length > 0:
                if content_length > self.max_body_bytes:
                    raise ValueError(f"Request body too large: {content_length} bytes")

                body = await asyncio.wait_for(
                    reader.readexactly(content_length),
                    timeout=self.read_timeout
                )

            return Request(
                method=method.upper(),
                path=path,
                headers=headers,
                query_params=query_params,
                body=body,
                version=version
            )

        except asyncio.TimeoutError:
            return None
        except (ValueError, UnicodeDecodeError, asyncio.IncompleteReadError) as e:
            logger.error(f"Error parsing request: {e}")
            return None

    def build_response(self, response: Response) -> bytes:
        """Build HTTP response bytes"""
        status_text = self.STATUS_MESSAGES.get(response.status, 'Unknown')

        if 'content-type' not in response.headers:
            response.headers['content-type'] = 'text/plain'

        response.headers['content-length'] = str(len(response.body))
        response.headers['connection'] = 'keep-alive'
        response.headers['server'] = 'AvlTreeHttp/1.0'

        response_line = f"HTTP/1.1 {response.status} {status_text}\r\n"
        header_lines = ''.join(
            f"{key}: {value}\r\n"
            for key, value in response.headers.items()
        )

        return (
            response_line.encode() +
            header_lines.encode() +
            b'\r\n' +
            response.body
        )

    async def handle_request(self, request: Request) -> Response:
        """Route request to appropriate handler"""
        route, params, path_known = self.resolve(request.method, request.path)

        if route is None:
            if path_known:
                return Response(status=405, body=b'Method Not Allowed')
            return Response(status=404, body=b'Route Not Found')

        request.path_params = params

        try:
            result = await route.handler(request)

            if isinstance(result, Response):
                return result
            elif isinstance(result, (dict, list)):
                return Response(
                    status=200,
                    headers={'content-type': 'application/json'},
                    body=json.dumps(result).encode()
                )
            elif isinstance(result, str):
                return Response(status=200, body=result.encode())
            elif isinstance(result, bytes):
                return Response(status=200, body=result)

            raise TypeError("Response cannot be casted to appropriate HTTP response format")
        except Exception:
            logger.exception(f"Handler error on {request.method} {request.path}")
            return Response(status=500, body=b'Internal Server Error')

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle a single client connection with keep-alive"""
        peer = writer.get_extra_info('peername')

        try:
            while True:
                request = await self.parse_request(reader)
                if request is None:
                    break

                start_time = time.perf_counter()
                logger.debug(f"--> {request.method} {request.path}")

                response = await self.handle_request(request)

                writer.write(self.build_response(response))
                await writer.drain()

                elapsed_ms = (time.perf_counter() - start_time) * 1000
                logger.debug(
                    f"<-- {response.status} - {len(response.body)} bytes - {elapsed_ms:.2f}ms"
                )

                if request.headers.get('connection', '').lower() == 'close':
                    break

        except ConnectionResetError:
            logger.debug(f"Connection reset by {peer}")
        except Exception as e:
            logger.error(f"Connection error from {peer}: {e}")
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionError, OSError) as e:
                logger.debug(f"Error closing connection to {peer}: {e}")

    async def start(self):
        """Start the HTTP server"""
        server = await asyncio.start_server(self.handle_client, self.host, self.port)

        addr = server.sockets[0].getsockname()
        logger.info(f'AVL tree HTTP server running on http://{addr[0]}:{addr[1]}')

        try:
            async with server:
                await server.serve_forever()
        except asyncio.CancelledError:
            logger.info("Server shutdown requested")
        finally:
            await self.shutdown(server)

    async def shutdown(self, server):
        """Gracefully shutdown the server"""
        logger.info("Shutting down server...")
        server.close()
        await server.wait_closed()
        logger.info("Server shutdown complete")
