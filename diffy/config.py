# diffy/config.py

APP_NAME = "DiffyInAJiffy"
APP_AUTHOR = "DiffyInAJiffy"
APP_VERSION = "1.0.0"

# UI
WINDOW_SIZE = (1200, 800)
WINDOW_TITLE = "DiffyInAJiffy - Side-by-Side Diff Viewer"

# Document types the extractor knows about; everything else is read as text
PDF_EXTENSIONS = {".pdf"}
DOCX_EXTENSIONS = {".docx"}
TEXT_EXTENSIONS = {".txt", ".md"}

# File dialog filter (same order as the About page lists formats)
OPEN_FILES_FILTER = (
    "All Supported Files (*.txt *.md *.docx *.pdf);;"
    "Text Files (*.txt);;Markdown Files (*.md);;"
    "Word Documents (*.docx);;PDF Files (*.pdf);;All Files (*)"
)

# Extraction safeguard: larger inputs are replaced by a placeholder line
TEXT_MAX_BYTES = 50 * 1024 * 1024         # 50 MB

# Characters dropped by remove_punctuation
PUNCTUATION_CHARS = ".,;:!?'\""

# Folder comparison: gitwildmatch patterns hidden by default
FOLDER_COMPARE_EXCLUDED_DEFAULT = [
    ".git/",
    "__pycache__/",
    ".DS_Store",
]

# Prefs keys for the three ignore toggles
FLAG_PREF_KEYS = ("ignore_whitespace", "ignore_reflow", "ignore_punctuation")
