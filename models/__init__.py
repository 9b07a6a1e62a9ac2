from .study_item import (
    Level,
    RecallStrength,
    UserScope,
    StudyItem,
    StudyItemCreate,
    PerformanceUpdate,
    StudyItemSearch,
    ReviewQuery,
    LearningStats,
)

__all__ = [
    'Level', 'RecallStrength', 'UserScope', 'StudyItem', 'StudyItemCreate',
    'PerformanceUpdate', 'StudyItemSearch', 'ReviewQuery', 'LearningStats',
]
