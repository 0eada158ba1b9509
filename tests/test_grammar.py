"""Tests for speechlauncher.core.grammar — compilation and matching."""

from __future__ import annotations

import logging

import pytest

from speechlauncher.core.config import Action, LauncherConfig, Topic
from speechlauncher.core.errors import ConfigurationError
from speechlauncher.core.grammar import GrammarSpec, SemanticChoice, compile_grammar
from speechlauncher.core.resolve import resolve


def _config(*topics: Topic, wake_word: str = "okay computer") -> LauncherConfig:
    return LauncherConfig(wake_word=wake_word, topics=topics)


class TestCompileGrammar:
    def test_sample_slots(self, sample_grammar: GrammarSpec) -> None:
        assert sample_grammar.wake_word == "okay computer"
        assert sample_grammar.objects == (
            SemanticChoice("test", "Test"),
            SemanticChoice("what", "Question"),
        )
        assert sample_grammar.actions == (
            SemanticChoice("echo", "Echo"),
            SemanticChoice("message", "Echo"),
            SemanticChoice("time is it", "Current Time"),
            SemanticChoice("is the time", "Current Time"),
        )

    def test_wake_word_normalized(self) -> None:
        grammar = compile_grammar(
            _config(Topic(name="T", words=("t",)), wake_word="  Okay   COMPUTER ")
        )
        assert grammar.wake_word == "okay computer"

    def test_action_slot_is_global(self) -> None:
        grammar = compile_grammar(
            _config(
                Topic(name="A", words=("a",), actions=(Action(name="Up", words=("up",)),)),
                Topic(name="B", words=("b",), actions=(Action(name="Down", words=("down",)),)),
            )
        )
        assert [c.value for c in grammar.actions] == ["Up", "Down"]

    def test_empty_word_lists_contribute_nothing(self) -> None:
        grammar = compile_grammar(
            _config(
                Topic(name="Mute", actions=(Action(name="Go", words=("go",)),)),
                Topic(name="Live", words=("live",), actions=(Action(name="Dead"),)),
            )
        )
        assert [c.value for c in grammar.objects] == ["Live"]
        assert [c.value for c in grammar.actions] == ["Go"]

    def test_duplicates_across_labels_kept(self) -> None:
        grammar = compile_grammar(
            _config(
                Topic(name="A", words=("open",)),
                Topic(name="B", words=("Open",)),
            )
        )
        assert grammar.objects == (
            SemanticChoice("open", "A"),
            SemanticChoice("open", "B"),
        )
        assert grammar.object_vocabulary == {"open"}

    def test_exact_repeat_collapsed(self) -> None:
        grammar = compile_grammar(
            _config(
                Topic(name="A", words=("a",), actions=(Action(name="Go", words=("go",)),)),
                Topic(name="B", words=("b",), actions=(Action(name="Go", words=("go",)),)),
            )
        )
        assert grammar.actions == (SemanticChoice("go", "Go"),)

    def test_no_topics_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_grammar(LauncherConfig())

    def test_deterministic(self, sample_config: LauncherConfig) -> None:
        assert compile_grammar(sample_config) == compile_grammar(sample_config)

    def test_vocabulary_sizes_match_distinct_words(self) -> None:
        config = _config(
            Topic(
                name="Music",
                words=("music", "player", "music"),
                actions=(
                    Action(name="Play", words=("play", "start")),
                    Action(name="Stop", words=("stop", "Start")),
                ),
            ),
            Topic(
                name="Browser",
                words=("browser", "player"),
                actions=(Action(name="Open", words=("open", "play")),),
            ),
        )
        grammar = compile_grammar(config)
        object_words = {w.lower() for t in config.topics for w in t.words}
        action_words = {
            w.lower() for t in config.topics for a in t.actions for w in a.words
        }
        assert len(grammar.object_vocabulary) == len(object_words) == 3
        assert len(grammar.action_vocabulary) == len(action_words) == 4


class TestPhrases:
    def test_full_expansion(self, sample_grammar: GrammarSpec) -> None:
        phrases = sample_grammar.phrases()
        assert len(phrases) == 2 * 4
        assert phrases[0] == "okay computer test echo"
        assert "okay computer what time is it" in phrases

    def test_duplicates_dropped(self) -> None:
        grammar = compile_grammar(
            _config(
                Topic(name="A", words=("x",), actions=(Action(name="Go", words=("go",)),)),
                Topic(name="B", words=("x",)),
            )
        )
        assert grammar.phrases() == ["okay computer x go"]


class TestMatch:
    def test_scenario_question_time(self, sample_grammar: GrammarSpec) -> None:
        assert sample_grammar.match("Okay computer what time is it") == {
            "object": "Question",
            "action": "Current Time",
        }
        assert sample_grammar.match("okay computer what is the time") == {
            "object": "Question",
            "action": "Current Time",
        }

    @pytest.mark.parametrize(
        "text",
        [
            "test echo",
            "okay computer test",
            "okay computer echo test",
            "okay computer test echo please",
            "hey computer test echo",
            "",
        ],
    )
    def test_rejects_out_of_grammar(self, sample_grammar: GrammarSpec, text: str) -> None:
        assert sample_grammar.match(text) is None

    def test_cross_object_action_still_matches(self, sample_grammar: GrammarSpec) -> None:
        # The action vocabulary is global; the resolver rejects this later.
        assert sample_grammar.match("okay computer test time is it") == {
            "object": "Test",
            "action": "Current Time",
        }

    def test_multi_word_object_phrase(self) -> None:
        grammar = compile_grammar(
            _config(
                Topic(
                    name="Web",
                    words=("web browser",),
                    actions=(Action(name="Open", words=("open",)),),
                )
            )
        )
        assert grammar.match("okay computer web browser open") == {
            "object": "Web",
            "action": "Open",
        }

    def test_first_declared_wins_on_duplicates(self) -> None:
        grammar = compile_grammar(
            _config(
                Topic(name="A", words=("x",), actions=(Action(name="Go", words=("go",)),)),
                Topic(name="B", words=("x",), actions=(Action(name="Go", words=("go",)),)),
            )
        )
        assert grammar.match("okay computer x go") == {"object": "A", "action": "Go"}

    def test_ambiguous_match_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        grammar = compile_grammar(
            _config(
                Topic(name="A", words=("x",), actions=(Action(name="Go", words=("go",)),)),
                Topic(name="B", words=("x",), actions=(Action(name="Go", words=("go",)),)),
            )
        )
        with caplog.at_level(logging.DEBUG, logger="speech"):
            grammar.match("okay computer x go")
        assert "Ambiguous utterance" in caplog.text

    def test_unambiguous_match_not_logged(
        self, sample_grammar: GrammarSpec, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="speech"):
            sample_grammar.match("okay computer test echo")
        assert "Ambiguous" not in caplog.text

    def test_punctuated_triggers_match_engine_text(self) -> None:
        grammar = compile_grammar(
            _config(
                Topic(
                    name="Mail",
                    words=("e-mail",),
                    actions=(Action(name="Check", words=("check, now!",)),),
                ),
                wake_word="Okay, computer",
            )
        )
        assert grammar.wake_word == "okay computer"
        assert grammar.phrases() == ["okay computer e mail check now"]
        assert grammar.match("okay computer e mail check now") == {
            "object": "Mail",
            "action": "Check",
        }

    def test_round_trip_to_resolver(self, sample_config: LauncherConfig) -> None:
        grammar = compile_grammar(sample_config)
        for topic in sample_config.topics:
            for action in topic.actions:
                for topic_word in topic.words:
                    for action_word in action.words:
                        labels = grammar.match(
                            f"{sample_config.wake_word} {topic_word} {action_word}"
                        )
                        assert labels is not None
                        resolved = resolve(
                            sample_config, labels["object"], labels["action"]
                        )
                        assert resolved is action
