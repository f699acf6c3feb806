from __future__ import annotations

DISCORD_API_BASE_URL = "https://discord.com/api/v10"

# Component types.
COMPONENT_TYPE_ACTION_ROW = 1
COMPONENT_TYPE_TEXT_INPUT = 4

# Interaction types.
INTERACTION_TYPE_APPLICATION_COMMAND = 2
INTERACTION_TYPE_AUTOCOMPLETE = 4
INTERACTION_TYPE_MODAL_SUBMIT = 5

# Interaction callback types.
RESPONSE_TYPE_AUTOCOMPLETE_RESULT = 8
RESPONSE_TYPE_MODAL = 9

# Application command option types that nest other options.
OPTION_TYPE_SUB_COMMAND = 1
OPTION_TYPE_SUB_COMMAND_GROUP = 2

# Structural limits enforced before anything reaches the network.
MODAL_MAX_ACTION_ROWS = 5
MODAL_TITLE_MAX_LENGTH = 45
ACTION_ROW_MAX_COMPONENTS = 5
CUSTOM_ID_MAX_LENGTH = 100
TEXT_INPUT_LABEL_MAX_LENGTH = 45
TEXT_INPUT_MAX_LENGTH = 4000
TEXT_INPUT_PLACEHOLDER_MAX_LENGTH = 100
AUTOCOMPLETE_MAX_CHOICES = 25
CHOICE_NAME_MAX_LENGTH = 100
