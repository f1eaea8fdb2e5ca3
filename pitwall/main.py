import logging

from fastapi import FastAPI
from pitwall.core.config import settings
from pitwall.api.routes import health, results, standings, rounds, bets, bonus, game

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Pitwall Scoring API", version="0.1.0")

# Routers
app.include_router(health.router, tags=["system"])
app.include_router(results.router, tags=["results"])
app.include_router(standings.router, prefix="/standings", tags=["standings"])
app.include_router(rounds.router, prefix="/rounds", tags=["rounds"])
app.include_router(bets.router, prefix="/bets", tags=["bets"])
app.include_router(bonus.router, prefix="/bonus", tags=["bonus"])
app.include_router(game.router, tags=["game"])

@app.get("/", include_in_schema=False)
def root():
    return {"message": "Pitwall Scoring API - see /docs"}
