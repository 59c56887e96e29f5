from abc import ABC, abstractmethod
from typing import List

from redefine.utils.files import write_json


class ComponentExtractor(ABC):
    """Per-file extraction contract shared by the framework extractors."""

    @abstractmethod
    def process_file(self, file_path: str):
        pass

    @abstractmethod
    def extract_all_components(self) -> List:
        pass

    def write_to_file(self, output_path: str):
        serializable = [comp.to_dict() for comp in self.extract_all_components()]
        write_json(output_path, serializable)
