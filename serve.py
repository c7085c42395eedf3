import asyncio
import logging
import os

from http_server.request import Request
from http_server.response import Response, error, response
from http_server.server import HTTPServer
from avltree import BalancedSearchTree, TreeService

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()


def mutation_response(result: dict) -> Response:
    status = 400 if result["outcome"] == "invalid_key" else 200
    return response(status_code=status).json(result)


async def main():
    server = HTTPServer(
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "5000")),
    )
    max_suggestions = int(os.environ.get("MAX_SUGGESTIONS", "50"))

    numbers = TreeService(BalancedSearchTree.integers(), name="numbers")
    words = TreeService(BalancedSearchTree.words(), name="words", max_suggestions=max_suggestions)

    seed = [w for w in os.environ.get("SEED_WORDS", "").split(",") if w.strip()]
    if seed:
        await words.seed(seed)

    register_number_routes(server, numbers)
    register_word_routes(server, words)
    logger.debug(f"Registered routes: {[(r.method, r.path) for r in server.routes]}")
    await server.start()


def register_number_routes(server: HTTPServer, service: TreeService):

    @server.route('/api/avl/insert', ['POST'])
    async def insert(request: Request) -> Response:
        value = request.get("value")
        if value is None:
            return error(400, "Missing 'value' in request body")

        return mutation_response(await service.insert(value))

    @server.route('/api/avl/delete/{value}', ['DELETE'])
    async def delete(request: Request) -> Response:
        return mutation_response(await service.delete(request.get("value")))

    @server.route('/api/avl/tree', ['GET'])
    async def tree(request: Request) -> Response:
        return response(status_code=200).json(await service.tree())

    @server.route('/api/avl/height', ['GET'])
    async def height(request: Request) -> Response:
        return response(status_code=200).json({"height": await service.theoretical_height()})

    @server.route('/api/avl/stats', ['GET'])
    async def stats(request: Request) -> Response:
        return response(status_code=200).json(await service.stats())

    @server.route('/api/avl/reset', ['POST'])
    async def reset(request: Request) -> Response:
        await service.reset()
        return response(status_code=200).json({"success": True})


def register_word_routes(server: HTTPServer, service: TreeService):

    @server.route('/api/words/insert', ['POST'])
    async def insert(request: Request) -> Response:
        word = request.get("word")
        if word is None:
            return error(400, "Missing 'word' in request body")

        return mutation_response(await service.insert(word))

    @server.route('/api/words/delete/{word}', ['DELETE'])
    async def delete(request: Request) -> Response:
        return mutation_response(await service.delete(request.get("word")))

    @server.route('/api/words/suggest', ['GET'])
    async def suggest(request: Request) -> Response:
        prefix = request.get("prefix")
        if prefix is None:
            return error(400, "Missing 'prefix' parameter")

        try:
            limit = request.get_int("limit")
        except ValueError as e:
            return error(400, str(e))

        if limit is not None and limit <= 0:
            return error(400, "'limit' must be positive")

        result = await service.suggest(prefix, limit)
        return response(status_code=400 if "error" in result else 200).json(result)

    @server.route('/api/words', ['GET'])
    async def words(request: Request) -> Response:
        return response(status_code=200).json({"words": await service.words()})

    @server.route('/api/words/stats', ['GET'])
    async def stats(request: Request) -> Response:
        return response(status_code=200).json(await service.stats())

    @server.route('/api/words/reset', ['POST'])
    async def reset(request: Request) -> Response:
        await service.reset()
        return response(status_code=200).json({"success": True})


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
