from abc import ABC, abstractmethod

from resumatch.models import LivePosting


class JobSearchBase(ABC):
    @abstractmethod
    def search(self, company: str) -> list[LivePosting]:
        pass
