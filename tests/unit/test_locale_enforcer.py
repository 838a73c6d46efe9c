"""Unit tests for English-only directive injection."""

import copy

from thinking_control.config import ENGLISH_INSTRUCTION
from thinking_control.core.locale_enforcer import LocaleEnforcer


class TestInjectionTargets:
    """Where the directive goes."""

    def test_prepends_to_system_string(self, system_and_user_messages):
        """String system content gets the directive and a blank line."""
        result = LocaleEnforcer().inject_instruction(system_and_user_messages)

        assert result[0]["content"] == f"{ENGLISH_INSTRUCTION}\n\nYou are a coding assistant."
        assert result[1]["content"] == "Fix the bug in login.js"

    def test_inserts_block_into_system_list(self):
        """Block system content gets a new text block at index 0."""
        messages = [
            {"role": "system", "content": [{"type": "text", "text": "Be brief.", "cache_control": {"type": "ephemeral"}}]},
            {"role": "user", "content": "hello"},
        ]
        result = LocaleEnforcer().inject_instruction(messages)

        assert result[0]["content"][0] == {"type": "text", "text": ENGLISH_INSTRUCTION}
        assert result[0]["content"][1] == messages[0]["content"][0]
        assert len(result[0]["content"]) == 2
        assert result[1]["content"] == "hello"

    def test_only_first_system_message(self):
        """Later system messages are left alone."""
        messages = [
            {"role": "system", "content": "first"},
            {"role": "system", "content": "second"},
        ]
        result = LocaleEnforcer().inject_instruction(messages)

        assert result[0]["content"].startswith(ENGLISH_INSTRUCTION)
        assert result[1]["content"] == "second"

    def test_system_preferred_over_earlier_user(self):
        """A system message anywhere wins over the first user message."""
        messages = [
            {"role": "user", "content": "hi"},
            {"role": "system", "content": "rules"},
        ]
        result = LocaleEnforcer().inject_instruction(messages)

        assert result[0]["content"] == "hi"
        assert result[1]["content"].startswith(ENGLISH_INSTRUCTION)

    def test_falls_back_to_first_user_string(self):
        """Without a system message the first user message is used."""
        messages = [
            {"role": "assistant", "content": "Hello!"},
            {"role": "user", "content": "你好"},
            {"role": "user", "content": "second"},
        ]
        result = LocaleEnforcer().inject_instruction(messages)

        assert result[0]["content"] == "Hello!"
        assert result[1]["content"] == f"{ENGLISH_INSTRUCTION}\n\n你好"
        assert result[2]["content"] == "second"

    def test_falls_back_to_first_user_blocks(self, block_messages):
        """User block content gets the directive block first; the image survives."""
        result = LocaleEnforcer().inject_instruction(block_messages)
        blocks = result[0]["content"]

        assert blocks[0] == {"type": "text", "text": ENGLISH_INSTRUCTION}
        assert blocks[1]["type"] == "text"
        assert blocks[2]["type"] == "image"
        assert blocks[2]["source"]["data"] == "iVBOR"

    def test_no_system_or_user_is_noop(self):
        """Assistant-only conversations come back unchanged (as a copy)."""
        messages = [{"role": "assistant", "content": "Hello!"}]
        result = LocaleEnforcer().inject_instruction(messages)

        assert result == messages
        assert result is not messages

    def test_empty_list(self):
        """An empty list stays empty."""
        assert LocaleEnforcer().inject_instruction([]) == []

    def test_custom_instruction(self):
        """The directive text is configurable."""
        result = LocaleEnforcer(instruction="Answer in English.").inject_instruction(
            [{"role": "user", "content": "hola"}]
        )
        assert result[0]["content"] == "Answer in English.\n\nhola"


class TestDisabled:
    """Disabled enforcement is a pure pass-through."""

    def test_disabled_returns_same_object(self, system_and_user_messages):
        """enabled=False returns the very same list."""
        assert LocaleEnforcer().inject_instruction(system_and_user_messages, False) is system_and_user_messages

    def test_disabled_by_constructor(self, system_and_user_messages):
        """force_english=False is used when enabled is not given."""
        enforcer = LocaleEnforcer(force_english=False)
        assert enforcer.inject_instruction(system_and_user_messages) is system_and_user_messages

    def test_explicit_enable_overrides_constructor(self, system_and_user_messages):
        """enabled=True wins over force_english=False."""
        result = LocaleEnforcer(force_english=False).inject_instruction(system_and_user_messages, True)
        assert result[0]["content"].startswith(ENGLISH_INSTRUCTION)


class TestNoMutation:
    """The caller's data is never touched."""

    def test_original_string_messages_unchanged(self, system_and_user_messages):
        """Injection leaves the input list and dicts intact."""
        snapshot = copy.deepcopy(system_and_user_messages)
        LocaleEnforcer().inject_instruction(system_and_user_messages)
        assert system_and_user_messages == snapshot

    def test_original_block_messages_unchanged(self, block_messages):
        """The content list of the input is not extended."""
        snapshot = copy.deepcopy(block_messages)
        LocaleEnforcer().inject_instruction(block_messages)
        assert block_messages == snapshot

    def test_mutating_result_does_not_reach_original(self, block_messages):
        """Nested objects of the result are independent copies."""
        snapshot = copy.deepcopy(block_messages)
        result = LocaleEnforcer().inject_instruction(block_messages)

        result[0]["content"][1]["text"] = "changed"
        result[0]["content"][2]["source"]["data"] = "changed"
        result[0]["role"] = "assistant"
        result.append({"role": "user", "content": "extra"})

        assert block_messages == snapshot

    def test_extra_message_keys_preserved(self):
        """Unknown keys survive the copy."""
        messages = [{"role": "user", "content": "hi", "name": "alice", "metadata": {"id": 1}}]
        result = LocaleEnforcer().inject_instruction(messages)

        assert result[0]["name"] == "alice"
        assert result[0]["metadata"] == {"id": 1}
        assert result[0]["metadata"] is not messages[0]["metadata"]


class TestTargetIndex:
    """Which message receives the directive."""

    def test_system_preferred(self):
        """The first system message wins even when a user turn comes first."""
        messages = [{"role": "user", "content": "a"}, {"role": "system", "content": "b"}]
        assert LocaleEnforcer.target_index(messages) == 1

    def test_first_user_without_system(self):
        """Falls back to the first user message."""
        messages = [{"role": "assistant", "content": "a"}, {"role": "user", "content": "b"}]
        assert LocaleEnforcer.target_index(messages) == 1

    def test_no_target(self):
        """Assistant-only or empty lists have no target."""
        assert LocaleEnforcer.target_index([{"role": "assistant", "content": "a"}]) == -1
        assert LocaleEnforcer.target_index([]) == -1
