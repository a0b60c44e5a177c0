from typing import Final

DATE_KEY_FORMAT: Final[str] = "%Y-%m-%d"
DATE_KEY_PATTERN: Final[str] = r"^\d{4}-\d{2}-\d{2}$"
SHARE_DATE_FORMAT: Final[str] = "%d/%m"

DEFAULT_STORAGE_KEY: Final[str] = "calplan_data"
EXPORT_FILENAME_TEMPLATE: Final[str] = "calplan-backup-{stamp}.json"
EXPORT_TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d_%H%M%S"
EXPORT_MEDIA_TYPE: Final[str] = "application/json"
BACKUPS_TO_KEEP: Final[int] = 10

# Save status shown next to the manual save button
SAVE_IDLE: Final[str] = "idle"
SAVE_SAVING: Final[str] = "saving"
SAVE_SAVED: Final[str] = "saved"

# User-facing messages
NOTHING_TO_ANALYZE: Final[str] = "Add some entries with a description to get an analysis."
ANALYSIS_UNAVAILABLE: Final[str] = "Could not generate an analysis right now."
ANALYSIS_FAILED: Final[str] = "Error while contacting the text-generation service."
IMPORT_SUCCEEDED: Final[str] = "Backup imported successfully."
IMPORT_FAILED: Final[str] = "Could not import the file. Make sure it is a valid planner JSON backup."
SAVE_FAILED: Final[str] = "Saving failed. Your changes are still in memory; try again."
AUTOSAVE_FAILED: Final[str] = "Automatic save failed."
NOTHING_TO_SHARE: Final[str] = "Add entries to share."

ADVISORY_PROMPT_TEMPLATE: Final[str] = (
    "Analyze these planned events for {date}:\n"
    "{lines}\n"
    "Give a quick summary of how demanding the day looks and one short strategic tip."
)
