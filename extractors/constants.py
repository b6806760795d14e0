import os

import dotenv

dotenv.load_dotenv()

# Replaced by the sheet name in the output path template.
SHEET_PLACEHOLDER = "<SHEET>"

# Names the office suite gives to database ranges, built-in names and
# formula-compatibility helpers.  Never taken under default selection.
EXCLUDED_SHEET_MARKERS = ("__Anonymous", "BuiltIn__", "_xlfn_ISFORMULA")

CONTENT_MEMBER = "content.xml"
SPREADSHEET_MARKER = "<office:spreadsheet"
NATIVE_SUFFIXES = (".ods", ".fods")

DEFAULT_SEPARATOR: str = os.getenv("ODS_EXTRACT_SEPARATOR", "\t")
DEFAULT_DELIMITER: str = os.getenv("ODS_EXTRACT_DELIMITER", '"')

SOFFICE_PATH: str = os.getenv("SOFFICE_PATH", "")
SOFFICE_TIMEOUT: int = int(os.getenv("SOFFICE_TIMEOUT", "120"))
