from typing import Dict, Any, Optional

from blogseo.services.analyzer.utils.text_utils import TextProcessor, text_processor


class BaseAnalyzer:
    """Base class for the text-based SEO analyzers."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        processor: Optional[TextProcessor] = None,
    ):
        """Initialize with configuration options."""
        self.config = config or {}
        self.text_processor = processor or text_processor

    def analyze(self, *args, **kwargs) -> Any:
        """
        Base analyze method to be implemented by subclasses.

        Returns:
            Analysis result model
        """
        raise NotImplementedError("Subclasses must implement analyze method")
