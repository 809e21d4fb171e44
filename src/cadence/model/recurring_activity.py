# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from cadence.model.entity_id import EntityId
from cadence.model.frequency_rule import FrequencyRule


class RecurringActivity(TypedDict):
    id: EntityId
    category: str  # display label only
    name: str
    description: Optional[str]
    frequency_rule: FrequencyRule
    start_date: pendulum.Date  # never an occurrence before this day
