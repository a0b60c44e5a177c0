import os
from pathlib import Path

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(os.getenv('CALPLAN_DATA_DIR', Path(__file__).parent.parent / 'data')).resolve()
STORAGE_FILE = DATA_DIR / 'local_storage.json'
BACKUP_DIR = DATA_DIR / 'backups'

__all__ = ['DATA_DIR', 'STORAGE_FILE', 'BACKUP_DIR']
