"""Tests for msgcatalog.i18n.translator module."""

import pytest

from msgcatalog.i18n import (
    CONSOLE,
    AudienceResolver,
    Translator,
    UnidentifiedAudience,
    UserAudience,
    interpolation_replacer,
)
from tests.factories.i18n import (
    RecordingSink,
    StaticDirectory,
    make_locale_settings,
    make_permission_check,
    make_registry,
)


@pytest.mark.unit
class TestInterpolationReplacer:
    """Tests for interpolation_replacer()."""

    def test_single_brace(self):
        """{name} placeholders are filled."""
        replace = interpolation_replacer({"player": "Steve"})
        assert replace("Welcome, {player}!") == "Welcome, Steve!"

    def test_double_brace(self):
        """{{name}} placeholders are filled."""
        replace = interpolation_replacer({"count": 3})
        assert replace("Loaded {{count}} languages") == "Loaded 3 languages"

    def test_missing_variable_raises(self):
        """A placeholder without a variable raises ValueError."""
        replace = interpolation_replacer({})
        with pytest.raises(ValueError):
            replace("Welcome, {player}!")

    def test_no_placeholders(self):
        """Messages without placeholders pass through."""
        assert interpolation_replacer({"x": 1})("Plain") == "Plain"

    def test_values_not_rescanned(self):
        """Substituted values containing braces are inserted verbatim."""
        replace = interpolation_replacer({"player": "{rank}", "rank": "Admin"})
        assert replace("Hi {player}, you are {rank}") == "Hi {rank}, you are Admin"

    def test_value_with_unknown_placeholder(self):
        """A value that looks like a placeholder is not treated as one."""
        replace = interpolation_replacer({"player": "{{nobody}}"})
        assert replace("Welcome, {{player}}!") == "Welcome, {{nobody}}!"


@pytest.mark.unit
class TestResolveMessage:
    """Tests for Translator.resolve_message()."""

    def test_resolve_for_user(self, translator, locale_cache):
        """Users get messages from their own catalog."""
        locale_cache.store("bruno", "fr_fr")
        assert translator.resolve_message(UserAudience("bruno"), "greeting") == "Bonjour"

    def test_resolve_inherited(self, translator, locale_cache):
        """Keys missing from a child catalog come from its parent."""
        locale_cache.store("carol", "en_gb")
        audience = UserAudience("carol")
        assert translator.resolve_message(audience, "farewell") == "Cheerio"
        assert translator.resolve_message(audience, "greeting") == "Hello"

    def test_resolve_for_console(self, translator):
        """The console gets the console catalog."""
        assert translator.resolve_message(CONSOLE, "greeting") == "Hello"

    def test_missing_key_returns_empty(self, translator):
        """Untranslated keys yield an empty string."""
        assert translator.resolve_message(CONSOLE, "missing.key") == ""

    def test_empty_key_raises(self, translator):
        """An empty key is a caller error."""
        with pytest.raises(ValueError):
            translator.resolve_message(CONSOLE, "")

    def test_no_catalog_returns_empty(self, locale_cache):
        """With no default catalog loaded, every audience gets ""."""
        registry = make_registry(settings=make_locale_settings(default_locale="fr_ca"))
        translator = Translator(AudienceResolver(registry, locale_cache))

        for audience in (None, UserAudience("u"), UnidentifiedAudience()):
            assert translator.resolve_message(audience, "greeting") == ""

    def test_replacer_applied(self, translator):
        """The substitution function is applied to the resolved message."""
        message = translator.resolve_message(
            CONSOLE, "welcome", replacer=interpolation_replacer({"player": "Alex"})
        )
        assert message == "Welcome, Alex!"

    def test_replacer_not_called_for_empty_message(self, translator):
        """Empty messages skip substitution and color."""
        calls = []

        def replacer(message):
            calls.append(message)
            return message

        assert translator.resolve_message(CONSOLE, "missing", replacer, color=True) == ""
        assert calls == []

    def test_color_applied_when_requested(self, translator):
        """The colorizer runs only when color is requested."""
        assert translator.resolve_message(CONSOLE, "colour.test") == "&aGreen"
        assert translator.resolve_message(CONSOLE, "colour.test", color=True) == "§aGreen"

    def test_replacer_runs_before_color(self, resolver):
        """Substitution sees the raw message; color sees the substituted one."""
        seen = []

        def colorizer(message):
            seen.append(message)
            return message.upper()

        translator = Translator(resolver, colorizer=colorizer)
        message = translator.resolve_message(
            CONSOLE,
            "welcome",
            replacer=interpolation_replacer({"player": "alex"}),
            color=True,
        )
        assert seen == ["Welcome, alex!"]
        assert message == "WELCOME, ALEX!"

    def test_color_without_colorizer(self, resolver):
        """Requesting color without a colorizer returns the plain message."""
        translator = Translator(resolver)
        assert translator.resolve_message(CONSOLE, "colour.test", color=True) == "&aGreen"

    def test_failing_replacer_returns_empty(self, translator):
        """A failing substitution degrades to an empty message."""
        message = translator.resolve_message(
            CONSOLE, "welcome", replacer=interpolation_replacer({})
        )
        assert message == ""


@pytest.mark.unit
class TestSendMessage:
    """Tests for Translator.send_message()."""

    def test_send_delivers(self, translator, sink):
        """send_message() hands the final message to the sink."""
        assert translator.send_message(CONSOLE, "greeting") is True
        assert sink.sent == [(CONSOLE, "Hello")]

    def test_send_skips_empty(self, translator, sink):
        """Empty messages are not delivered."""
        assert translator.send_message(CONSOLE, "missing") is False
        assert sink.sent == []

    def test_send_requires_audience(self, translator):
        """send_message() needs an audience."""
        with pytest.raises(ValueError):
            translator.send_message(None, "greeting")

    def test_send_requires_sink(self, resolver):
        """send_message() needs a configured sink."""
        with pytest.raises(RuntimeError):
            Translator(resolver).send_message(CONSOLE, "greeting")


@pytest.mark.unit
class TestBroadcastMessage:
    """Tests for Translator.broadcast_message()."""

    def test_broadcast_resolves_each_audience(self, translator, sink, online_users):
        """Each recipient gets the message in its own locale."""
        delivered = translator.broadcast_message("farewell")

        assert delivered == 3
        assert sink.sent == [
            (online_users[0], "Goodbye"),
            (online_users[1], "Au revoir"),
            (online_users[2], "Cheerio"),
        ]

    def test_broadcast_with_permission(self, resolver, sink, online_users):
        """Only audiences passing the permission check receive the message."""
        alice, bruno, carol = online_users
        translator = Translator(
            resolver,
            sink=sink,
            directory=StaticDirectory(online_users),
            permission_check=make_permission_check(
                {bruno: ["vip"], carol: ["vip", "staff"]}
            ),
        )

        delivered = translator.broadcast_message("greeting", permission="vip")

        assert delivered == 2
        assert sink.sent == [(bruno, "Bonjour"), (carol, "Hello")]

    def test_broadcast_empty_permission_means_everyone(self, translator, sink):
        """An empty permission does not filter recipients."""
        assert translator.broadcast_message("greeting", permission="") == 3

    def test_broadcast_permission_without_check(self, translator, sink):
        """Without a permission check, a required permission admits nobody."""
        assert translator.broadcast_message("greeting", permission="vip") == 0
        assert sink.sent == []

    def test_broadcast_continues_after_delivery_failure(self, resolver, online_users):
        """A failing delivery does not stop the broadcast."""
        sink = RecordingSink(failing=[online_users[0]])
        translator = Translator(
            resolver, sink=sink, directory=StaticDirectory(online_users)
        )

        assert translator.broadcast_message("greeting") == 2
        assert [audience for audience, _ in sink.sent] == online_users[1:]

    def test_broadcast_with_replacer(self, translator, sink):
        """The substitution applies to every recipient's own message."""
        translator.broadcast_message(
            "welcome", replacer=interpolation_replacer({"player": "Sam"})
        )
        assert [message for _, message in sink.sent] == [
            "Welcome, Sam!",
            "Bienvenue, Sam !",
            "Welcome, Sam!",
        ]

    def test_broadcast_requires_directory(self, resolver, sink):
        """broadcast_message() needs an audience directory."""
        with pytest.raises(RuntimeError):
            Translator(resolver, sink=sink).broadcast_message("greeting")

    def test_broadcast_empty_key_raises(self, translator):
        """An empty key is a caller error."""
        with pytest.raises(ValueError):
            translator.broadcast_message("")

    def test_broadcast_requires_sink(self, resolver, online_users):
        """broadcast_message() needs a sink before any audience is visited."""
        translator = Translator(resolver, directory=StaticDirectory(online_users))
        with pytest.raises(RuntimeError):
            translator.broadcast_message("greeting")

    def test_broadcast_continues_after_permission_check_failure(
        self, resolver, sink, online_users
    ):
        """A permission check that raises skips only that audience."""
        alice, bruno, carol = online_users

        def check(audience, permission):
            if audience == bruno:
                raise ConnectionError("permission backend unavailable")
            return True

        translator = Translator(
            resolver,
            sink=sink,
            directory=StaticDirectory(online_users),
            permission_check=check,
        )

        assert translator.broadcast_message("greeting", permission="vip") == 2
        assert [audience for audience, _ in sink.sent] == [alice, carol]
