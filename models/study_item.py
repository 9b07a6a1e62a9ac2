from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from enum import Enum

from utils.tags import load_tags

class Level(str, Enum):
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

class RecallStrength(str, Enum):
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"

class UserScope(BaseModel):
    user_id: str = Field(..., alias="userId", description="User ID")

    model_config = ConfigDict(populate_by_name=True)

class StudyItemCreate(UserScope):
    type: str = Field(..., description="Type of study item (e.g., vocab, grammar)")
    content: str = Field(..., description="The content to study")
    level: Level = Field(..., description="Difficulty level")
    tags: Optional[List[str]] = Field(None, description="Tags for categorization")
    notes: Optional[str] = Field(None, description="Optional notes")

class PerformanceUpdate(UserScope):
    id: str = Field(..., description="Study item ID")
    recall_strength: RecallStrength = Field(
        ..., alias="recallStrength", description="How well the user recalled this item"
    )

class StudyItemSearch(UserScope):
    content: Optional[str] = Field(None, description="Case-insensitive substring of the content")
    tags: Optional[List[str]] = Field(None, description="Keep items sharing at least one tag")
    type: Optional[str] = Field(None, description="Filter by type")
    level: Optional[Level] = Field(None, description="Filter by level")

class ReviewQuery(UserScope):
    recall_strength: Optional[RecallStrength] = Field(
        None, alias="recallStrength", description="Filter by recall strength"
    )
    due_before: Optional[str] = Field(
        None, alias="dueBefore", description="Get items due before this date (ISO string)"
    )

class StudyItem(BaseModel):
    id: str
    user_id: str = Field(..., alias="userId")
    type: str
    content: str
    level: Level
    tags: List[str] = Field(default_factory=list)
    recall_strength: RecallStrength = Field(RecallStrength.WEAK, alias="recallStrength")
    last_reviewed: Optional[int] = Field(None, alias="lastReviewed")
    next_review: int = Field(..., alias="nextReview")
    notes: Optional[str] = None
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    @classmethod
    def from_row(cls, row) -> "StudyItem":
        """Build from a `study_items` sqlite3.Row."""
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            type=row["type"],
            content=row["content"],
            level=row["level"],
            tags=load_tags(row["tags"]),
            recall_strength=row["recall_strength"],
            last_reviewed=row["last_reviewed"],
            next_review=row["next_review"],
            notes=row["notes"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

class LearningStats(BaseModel):
    total: int = 0
    by_recall_strength: Dict[str, int] = Field(
        default_factory=lambda: {strength.value: 0 for strength in RecallStrength},
        alias="byRecallStrength",
    )
    by_level: Dict[str, int] = Field(default_factory=dict, alias="byLevel")
    by_type: Dict[str, int] = Field(default_factory=dict, alias="byType")
    due_for_review: int = Field(0, alias="dueForReview")
    reviewed_today: int = Field(0, alias="reviewedToday")

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
