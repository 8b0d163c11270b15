# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from .user import User
from .journal import JournalEntry
from .mood import MoodEntry
from .conversation import Conversation, ChatMessage
from .api_log import ApiLog
