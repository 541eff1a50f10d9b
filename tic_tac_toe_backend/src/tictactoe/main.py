import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException, Path, Request, status
from fastapi.middleware.cors import CORSMiddleware

from . import config
from . import models
from .controller import GameController
from .database import create_store

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    controller = GameController(store=create_store())
    await controller.load()
    app.state.controller = controller
    logger.info("Tic Tac Toe engine ready (store=%s)", config.STORE)
    yield
    await controller.close()


app = FastAPI(
    title="Tic Tac Toe Game Engine",
    version="1.0.0",
    description="Single- and two-player Tic Tac Toe with a minimax opponent, scores and game history.",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Game", "description": "Moves, undo and reset of the live game."},
        {"name": "Settings", "description": "Mode, difficulty, mark, names and sound."},
        {"name": "Scores", "description": "Win tallies per game mode."},
        {"name": "History", "description": "Completed games."}
    ]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _controller(request: Request) -> GameController:
    return request.app.state.controller


@app.get("/", tags=["Health"], summary="Health Check", response_model=dict)
def health_check():
    """Health check endpoint."""
    return {"message": "Healthy"}


# -- GAME --
@app.get("/game", tags=["Game"], response_model=models.GameOut)
async def api_get_game(request: Request):
    return _controller(request).game()

@app.post("/game/moves", tags=["Game"], response_model=models.GameOut)
async def api_make_move(request: Request, move: models.MoveCreate):
    """
    Play a cell for the human. Waits for the AI reply in single-player mode.
    Illegal moves are ignored and the unchanged game is returned.
    """
    controller = _controller(request)
    await controller.make_move(move.index)
    await controller.settle()
    return controller.game()

@app.post("/game/undo", tags=["Game"], response_model=models.GameOut)
async def api_undo_move(request: Request):
    controller = _controller(request)
    await controller.undo_move()
    return controller.game()

@app.post("/game/reset", tags=["Game"], response_model=models.GameOut)
async def api_reset_game(request: Request):
    controller = _controller(request)
    controller.reset_game()
    return controller.game()


# -- SETTINGS --
@app.get("/settings", tags=["Settings"], response_model=models.SettingsOut)
async def api_get_settings(request: Request):
    return _controller(request).settings()

@app.put("/settings/mode", tags=["Settings"], response_model=models.GameOut)
async def api_select_mode(request: Request, body: models.ModeIn):
    """Switch between single and two-player mode. Starts a new game."""
    controller = _controller(request)
    controller.select_game_mode(body.mode)
    return controller.game()

@app.put("/settings/difficulty", tags=["Settings"], response_model=models.SettingsOut)
async def api_select_difficulty(request: Request, body: models.DifficultyIn):
    controller = _controller(request)
    controller.select_difficulty(body.difficulty)
    return controller.settings()

@app.put("/settings/mark", tags=["Settings"], response_model=models.GameOut)
async def api_select_mark(request: Request, body: models.MarkIn):
    """Choose the human's mark. Starts a new game; the AI opens if the human picks O."""
    controller = _controller(request)
    controller.select_player_mark(body.mark)
    return controller.game()

@app.put("/settings/names", tags=["Settings"], response_model=models.SettingsOut)
async def api_set_name(request: Request, body: models.NameIn):
    controller = _controller(request)
    await controller.set_player_name(body.mark, body.name)
    return controller.settings()

@app.put("/settings/sound", tags=["Settings"], response_model=models.SettingsOut)
async def api_set_sound(request: Request, body: models.SoundIn):
    controller = _controller(request)
    await controller.set_sound_enabled(body.enabled)
    return controller.settings()


# -- SCORES --
@app.get("/scores", tags=["Scores"], response_model=models.Scores)
async def api_get_scores(request: Request):
    return _controller(request).scores

@app.delete("/scores", tags=["Scores"], response_model=models.Scores)
async def api_reset_scores(request: Request):
    controller = _controller(request)
    await controller.reset_scores()
    return controller.scores


# -- HISTORY --
@app.get("/history", tags=["History"], response_model=List[models.HistoryEntry])
async def api_list_history(request: Request):
    """Completed games, newest first."""
    return _controller(request).history

@app.delete("/history/{index}", tags=["History"], response_model=models.Scores,
            status_code=status.HTTP_200_OK)
async def api_delete_history_entry(request: Request, index: int = Path(..., ge=0, description="History position")):
    """Delete a completed game and take back its score."""
    controller = _controller(request)
    try:
        await controller.delete_history_entry(index)
    except IndexError:
        raise HTTPException(status_code=404, detail="History entry not found")
    return controller.scores
