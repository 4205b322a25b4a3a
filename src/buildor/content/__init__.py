from src.buildor.content.site import SECTION_NAMES, SITE_CONTENT, get_section

__all__ = ["SECTION_NAMES", "SITE_CONTENT", "get_section"]
