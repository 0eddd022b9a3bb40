from __future__ import annotations

UTC_TIME_ZONE = "UTC"
ASIA_TEHRAN_ZONE = "Asia/Tehran"

DEFAULT_PERSIAN_DATE_FORMAT = "yyyy/MM/dd"
DEFAULT_PERSIAN_DATE_TIME_FORMAT = "yyyy/MM/dd'T'HH:mm:ss"
DEFAULT_PERSIAN_FIND_DATE_FORMAT = "yyyyMMdd"

LOCAL_TIME_POLICIES = ("raise", "compatible")
# a midnight inside a DST gap (Asia/Tehran before 2023) resolves to the first instant of that day
DEFAULT_LOCAL_TIME_POLICY = "compatible"

# Messages
LOCAL_DATE_MUST_NOT_BE_NONE = "local_date must not be None"
LOCAL_DATE_TIME_MUST_NOT_BE_NONE = "local_date_time must not be None"
INSTANT_MUST_NOT_BE_NONE = "instant must not be None"
ZONE_MUST_NOT_BE_NONE = "zone must not be None"
INPUT_DATE_NOT_EMPTY = "Input date string cannot be None or empty."
ERROR_PARSING_INPUT_DATE = "Error parsing the input date string: "
NOT_PARSABLE = "Date as specified is not parsable: "
