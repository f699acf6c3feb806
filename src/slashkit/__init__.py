"""Build, validate and dispatch interaction responses (modals, autocomplete)."""

from .choices import Choice
from .components import (
    ActionRow,
    TextInput,
    TextInputDraft,
    TextInputStyle,
    decode_action_row,
    decode_component,
    decode_text_input,
)
from .config import SlashkitConfig, load_config
from .errors import (
    ConfigError,
    DecodingError,
    InteractionAlreadyRespondedError,
    PermanentTransportError,
    SlashkitError,
    TransientTransportError,
    TransportError,
    ValidationError,
)
from .events import (
    CommandAutocompleteEvent,
    CommandInteractionFacade,
    SlashCommandEvent,
)
from .interactions import (
    ChannelRef,
    CommandInteraction,
    CommandInteractionRecord,
    ModalSubmission,
    OptionMapping,
    extract_channel_id,
    extract_command_path_and_options,
    extract_guild_id,
    extract_interaction_id,
    extract_interaction_token,
    extract_modal_values,
    extract_user_id,
)
from .modals import Modal, ModalBuilder, decode_modal, modal_from_definition
from .responses import (
    InteractionResponder,
    PendingResponse,
    RequestExecutor,
    Route,
    build_autocomplete_payload,
    build_modal_payload,
    interaction_callback_route,
)
from .rest import InteractionRestClient

__all__ = [
    "ActionRow",
    "ChannelRef",
    "Choice",
    "CommandAutocompleteEvent",
    "CommandInteraction",
    "CommandInteractionFacade",
    "CommandInteractionRecord",
    "ConfigError",
    "DecodingError",
    "InteractionAlreadyRespondedError",
    "InteractionResponder",
    "InteractionRestClient",
    "Modal",
    "ModalBuilder",
    "ModalSubmission",
    "OptionMapping",
    "PendingResponse",
    "PermanentTransportError",
    "RequestExecutor",
    "Route",
    "SlashCommandEvent",
    "SlashkitConfig",
    "SlashkitError",
    "TextInput",
    "TextInputDraft",
    "TextInputStyle",
    "TransientTransportError",
    "TransportError",
    "ValidationError",
    "build_autocomplete_payload",
    "build_modal_payload",
    "decode_action_row",
    "decode_component",
    "decode_modal",
    "decode_text_input",
    "extract_channel_id",
    "extract_command_path_and_options",
    "extract_guild_id",
    "extract_interaction_id",
    "extract_interaction_token",
    "extract_modal_values",
    "extract_user_id",
    "interaction_callback_route",
    "load_config",
    "modal_from_definition",
]
