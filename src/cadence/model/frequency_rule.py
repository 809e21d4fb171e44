# SPDX-License-Identifier: MIT

from enum import Enum


class FrequencyRule(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    WEEKDAY_ONLY = "weekday_only"
    WEEKEND_ONLY = "weekend_only"


# Spellings accepted at ingestion in addition to the enum values themselves.
# Matching is exact after lowercasing and stripping, never by substring.
FREQUENCY_ALIASES: dict[str, FrequencyRule] = {
    "bi-weekly": FrequencyRule.BIWEEKLY,
    "weekday": FrequencyRule.WEEKDAY_ONLY,
    "weekdays": FrequencyRule.WEEKDAY_ONLY,
    "weekend": FrequencyRule.WEEKEND_ONLY,
    "weekends": FrequencyRule.WEEKEND_ONLY,
}
