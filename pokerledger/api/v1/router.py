from fastapi import APIRouter
from loguru import logger

from pokerledger.api.v1.endpoints import events, game_types, players, sessions, stats

logger.info("Initializing API v1 router")
api_router = APIRouter(prefix="/api/v1")

logger.debug("Registering players endpoint")
api_router.include_router(players.router, prefix="/players", tags=["players"])
logger.debug("Registering stats endpoint")
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
logger.debug("Registering events endpoint")
api_router.include_router(events.router, prefix="/events", tags=["events"])
logger.debug("Registering sessions endpoint")
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
logger.debug("Registering game types endpoint")
api_router.include_router(game_types.router, prefix="/game-types", tags=["game-types"])
logger.success("API v1 router initialized successfully")
