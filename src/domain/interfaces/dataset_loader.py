from abc import ABC, abstractmethod

from src.domain.entities.instance import Instance


class InstanceLoader(ABC):
    """Abstract interface for loading labeled instances."""

    @abstractmethod
    def load(self, path: str) -> list[Instance]:
        """
        Load every labeled instance stored at the given location.

        Parameters:
            path (str): Location of the dataset.

        Returns:
            list[Instance]: Instances in the order they are stored.
        """
        pass
