"""Post-processor interface."""

from abc import ABC, abstractmethod

from infrastructure.i18n import TranslationSet


class PostProcessor(ABC):
    """One stage of the post-processing pipeline.

    Stages are pure: they never modify their arguments and return a new
    draft. They run left to right in the order the task was configured
    with.

    Attributes:
        name: Stage name used in logs.
    """

    name: str = "post_processor"

    @abstractmethod
    def process(
        self,
        draft: TranslationSet,
        extracted: TranslationSet,
        existing: TranslationSet,
    ) -> TranslationSet:
        """Derive the next draft.

        Args:
            draft: Output of the previous stage.
            extracted: Keys found in this run.
            existing: Keys parsed from the previous output file.

        Returns:
            New draft.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
