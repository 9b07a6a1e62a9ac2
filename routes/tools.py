from fastapi import APIRouter, Depends, Request
from typing import Any, Dict, List
from db.database import get_db
from config import load_config
from models.study_item import (
    PerformanceUpdate,
    ReviewQuery,
    StudyItemCreate,
    StudyItemSearch,
    UserScope,
)
from utils import study_items
from utils.scheduler import intervals_from_config

router = APIRouter()

TOOLS = [
    {
        "name": "create_study_item",
        "description": "Create a new study item for learning with spaced repetition scheduling",
        "input": StudyItemCreate,
    },
    {
        "name": "update_study_performance",
        "description": "Update performance/recall strength for a study item and reschedule next review",
        "input": PerformanceUpdate,
    },
    {
        "name": "search_study_items",
        "description": "Search and filter study items by content, tags, type, or difficulty level",
        "input": StudyItemSearch,
    },
    {
        "name": "get_items_for_review",
        "description": "Get study items that are due for review based on spaced repetition algorithm",
        "input": ReviewQuery,
    },
    {
        "name": "get_study_types",
        "description": "Get all unique study item types for the user (e.g., vocabulary, grammar, concepts)",
        "input": UserScope,
    },
    {
        "name": "get_learning_stats",
        "description": "Get comprehensive learning statistics and progress overview for the user",
        "input": UserScope,
    },
]

def get_intervals(request: Request) -> Dict[str, float]:
    """Dependency: review intervals (hours) loaded once per app.

    Set by the app lifespan; loaded on first use when the app runs without it.
    """
    state = request.app.state
    if getattr(state, "intervals", None) is None:
        state.intervals = intervals_from_config(load_config())
    return state.intervals

@router.get("")
async def list_tools() -> List[Dict[str, Any]]:
    """Describe every tool with its JSON input schema."""
    return [
        {
            "name": tool["name"],
            "description": tool["description"],
            "inputSchema": tool["input"].model_json_schema(by_alias=True),
        }
        for tool in TOOLS
    ]

@router.post("/create_study_item")
def create_study_item(
    payload: StudyItemCreate,
    conn = Depends(get_db),
    intervals: Dict[str, float] = Depends(get_intervals),
):
    return study_items.create_study_item(conn, payload, intervals)

@router.post("/update_study_performance")
def update_study_performance(
    payload: PerformanceUpdate,
    conn = Depends(get_db),
    intervals: Dict[str, float] = Depends(get_intervals),
):
    return study_items.update_study_performance(conn, payload, intervals)

@router.post("/search_study_items")
def search_study_items(payload: StudyItemSearch, conn = Depends(get_db)):
    return study_items.search_study_items(conn, payload)

@router.post("/get_items_for_review")
def get_items_for_review(payload: ReviewQuery, conn = Depends(get_db)):
    return study_items.get_items_for_review(conn, payload)

@router.post("/get_study_types")
def get_study_types(payload: UserScope, conn = Depends(get_db)):
    return study_items.get_study_types(conn, payload)

@router.post("/get_learning_stats")
def get_learning_stats(payload: UserScope, conn = Depends(get_db)):
    return study_items.get_learning_stats(conn, payload)
