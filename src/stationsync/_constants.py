"""Internal constants shared across the package."""

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_DATA_FILE = "data/stations.json"

# Bounded history: older records beyond this count are dropped on every sync.
MAX_RECORDS_PER_STATION = 50

SAVED_AT_KEY = "savedAt"

# ------------------------------------------------------------------
# User-facing response messages (wire strings, kept as shipped to devices)
# ------------------------------------------------------------------

MSG_SYNC_OK = "تمت المزامنة بنجاح"
MSG_SERVER_ERROR = "حدث خطأ في الخادم"
MSG_STATION_NOT_FOUND = "المحطة غير موجودة"
MSG_INVALID_PAYLOAD = "بيانات المزامنة غير صالحة"


def station_deleted_message(name: str) -> str:
    return f"تم حذف محطة {name}"
