from .code_extractor import CodeExtractor
from .extractor_factory import ExtractorFactory
from .java_extractor import JavaExtractor
from .react_extractor import ReactExtractor
from .typescript_extractor import TypeScriptExtractor
from .css_extractor import CssExtractor
from .html_extractor import HtmlExtractor

# Register built-in extractors; order here is the default orchestration order
ExtractorFactory.register(JavaExtractor)
ExtractorFactory.register(ReactExtractor)
ExtractorFactory.register(TypeScriptExtractor)
ExtractorFactory.register(CssExtractor)
ExtractorFactory.register(HtmlExtractor)

__all__ = [
    "CodeExtractor",
    "ExtractorFactory",
    "JavaExtractor",
    "ReactExtractor",
    "TypeScriptExtractor",
    "CssExtractor",
    "HtmlExtractor",
]
