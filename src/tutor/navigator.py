"""Tab navigation between lessons."""

from typing import Callable, Dict, List, Optional, Tuple, Union

from ..logging_config import get_logger
from .lessons import LessonPanel
from .structures import LessonId

logger = get_logger(__name__)

PanelFactory = Callable[[], LessonPanel]


class LessonNavigator:
    """Owns the selected lesson and keeps exactly one panel mounted."""

    def __init__(
        self,
        panel_factories: Dict[LessonId, PanelFactory],
        initial: LessonId = LessonId.PIANO,
    ):
        """Initialize the navigator and mount the initial lesson.

        Args:
            panel_factories: Builds a fresh panel for each lesson
            initial: Lesson selected at start
        """
        missing = [lesson.value for lesson in LessonId if lesson not in panel_factories]
        if missing:
            raise ValueError(f"No panel factory for: {', '.join(missing)}")

        self._factories = dict(panel_factories)
        self._selected = LessonId.parse(initial)
        self._panel: Optional[LessonPanel] = None
        self._mount(self._selected)

    @property
    def selected(self) -> LessonId:
        return self._selected

    @property
    def active_panel(self) -> LessonPanel:
        return self._panel

    def tabs(self) -> List[Tuple[str, bool]]:
        """Get each tab label with whether it is selected, in tab order."""
        return [(lesson.label, lesson is self._selected) for lesson in LessonId]

    def select(self, lesson_id: Union[LessonId, str]) -> LessonPanel:
        """Switch to a lesson, remounting its panel from scratch.

        Selecting the current lesson keeps the mounted panel as is.

        Args:
            lesson_id: Lesson to show

        Returns:
            The mounted panel

        Raises:
            ValueError: If lesson_id does not name a lesson
        """
        lesson = LessonId.parse(lesson_id)
        if lesson is self._selected:
            return self._panel

        logger.info(f"Switching lesson: {self._selected.value} -> {lesson.value}")
        self._panel.unmount()
        self._panel = None
        self._selected = lesson
        return self._mount(lesson)

    def close(self) -> None:
        """Unmount the active panel."""
        if self._panel is not None:
            self._panel.unmount()

    def _mount(self, lesson: LessonId) -> LessonPanel:
        panel = self._factories[lesson]()
        self._panel = panel
        panel.mount()
        return panel
