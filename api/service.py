from abc import ABC, abstractmethod
from typing import List

from dto.plan import PlanOfStudy


class PlanOfStudyService(ABC):
    """
    Storage for assembled plans of study.

    The parser never calls this; callers hand it a plan once they are
    satisfied with the parse result.
    """

    @abstractmethod
    def submit(self, plan: PlanOfStudy) -> str:
        """Store *plan* and return the service's confirmation message."""
        ...

    @abstractmethod
    def remove(self, department_id: int) -> str:
        """Delete the stored plan for a department and return the message."""
        ...

    @abstractmethod
    def list_all(self) -> List[PlanOfStudy]:
        """Return every stored plan."""
        ...
