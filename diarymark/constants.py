"""Constants and configuration for the diarymark editor."""

class EditorConstants:
    """Central configuration constants for the editor."""
    
    # Marker delimiters embedded in diary text
    BOLD_DELIMITER = "*"
    UNDERLINE_DELIMITER = "`"
    HIGHLIGHT_DELIMITER = "|"
    
    # Placeholder phrases inserted when nothing is selected
    BOLD_PLACEHOLDER = "bold text"
    UNDERLINE_PLACEHOLDER = "underlined text"
    HIGHLIGHT_PLACEHOLDER = "highlighted text"
    
    # Highlight palette: name -> preview CSS classes
    DEFAULT_HIGHLIGHT_COLOR = "yellow"
    HIGHLIGHT_PALETTE = {
        "yellow": "bg-yellow-200 text-yellow-900",
        "green": "bg-green-200 text-green-900",
        "blue": "bg-blue-200 text-blue-900",
        "pink": "bg-pink-200 text-pink-900",
        "purple": "bg-purple-200 text-purple-900",
        "orange": "bg-orange-200 text-orange-900",
    }
    
    # Terminal background for each palette color (blessed X11 names)
    HIGHLIGHT_TERMINAL_COLORS = {
        "yellow": "on_yellow",
        "green": "on_green",
        "blue": "on_blue",
        "pink": "on_pink",
        "purple": "on_purple",
        "orange": "on_orange",
    }
    
    # Diary storage
    ENTRY_DATE_FORMAT = "%Y-%m-%d"
    ENTRIES_FILENAME = "entries.json"
    SETTINGS_FILENAME = "settings.json"
    APP_NAME = "diarymark"
    APP_AUTHOR = "diarymark"
    
    # Editor chrome
    QUICK_GUIDE = "*bold*  `underline`  |yellow|highlight|yellow|  Ctrl-B, Ctrl-U for shortcuts"
    
    # Logging
    LOG_LEVEL_ENV = "DIARYMARK_LOG_LEVEL"
