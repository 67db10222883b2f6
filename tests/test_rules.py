"""
Scriptlet rule tests

Tests rule classification, domain parsing, parameter assembly and engine
invocation with explicitly passed dependencies.
"""

import pytest

from scriptlet.config import appsettings
from scriptlet.lib.parser import DirectiveParser, MalformedDirective
from scriptlet.lib.rules import ScriptletRule, domains_parse, scriptletRule_is
from scriptlet.models.rules import DomainSet, FilterRule, ScriptletEngine, ScriptletParams


class RecordingEngine:
    """Engine stand-in that records what it was invoked with"""

    def __init__(self):
        self.calls = []

    def invoke(self, params):
        self.calls.append(params)
        return f"/* {params['name']} */"


class TestClassification:
    """Test scriptlet rule detection"""

    def test_scriptlet_rule(self):
        """Rule containing the marker"""
        assert scriptletRule_is("example.org#%#//scriptlet('log')")

    def test_other_rules(self):
        """Cosmetic and network rules are not scriptlet rules"""
        assert not scriptletRule_is("example.org##.banner")
        assert not scriptletRule_is("||ads.example.org^")
        assert not scriptletRule_is("example.org#%#window.foo = 1;")

    def test_custom_marker(self):
        """Marker can be passed explicitly"""
        assert scriptletRule_is("example.org##+js(foo)", marker="+js")


class TestDomainParsing:
    """Test the domain prefix parser"""

    def test_empty(self):
        """No domains means no restriction"""
        domains = domains_parse("")
        assert domains.empty_is()

    def test_permitted_and_restricted(self):
        """'~' marks excluded domains"""
        domains = domains_parse("example.org,~ads.example.org,Example.COM")

        assert domains.permitted == ["example.org", "example.com"]
        assert domains.restricted == ["ads.example.org"]

    def test_whitespace_and_empty_entries(self):
        """Blank entries are dropped"""
        domains = domains_parse(" example.org , ,~")
        assert domains == DomainSet(permitted=["example.org"], restricted=[])

    def test_applies(self):
        """Subdomains match, restrictions win"""
        domains = domains_parse("example.org,~ads.example.org")

        assert domains.applies("example.org")
        assert domains.applies("www.example.org")
        assert not domains.applies("ads.example.org")
        assert not domains.applies("other.org")
        assert not domains.applies("notexample.org")

    def test_applies_everywhere(self):
        """Only restrictions: everything else matches"""
        domains = domains_parse("~example.org")

        assert domains.applies("other.org")
        assert not domains.applies("sub.example.org")


class TestScriptletRule:
    """Test building ScriptletRule objects"""

    def test_normal_rule(self):
        """Domains, name and args of a normal rule"""
        rule = ScriptletRule.fromText(
            "example.org,~sub.example.org#%#//scriptlet('abort-on-property-read', 'alert')",
            filterId=3,
            version="2.0.0",
        )

        assert rule.filterId == 3
        assert not rule.whitelist_is()
        assert rule.domains.permitted == ["example.org"]
        assert rule.domains.restricted == ["sub.example.org"]
        assert rule.name == "abort-on-property-read"
        assert rule.params.args == ["alert"]
        assert rule.script is None
        assert rule.scriptSource == "local"

    def test_whitelist_rule(self):
        """Exception mask marks a whitelist rule"""
        rule = ScriptletRule.fromText(
            "example.org#@%#//scriptlet('log')", filterId=1, version="1.0"
        )

        assert rule.whitelist_is()
        assert rule.domains.permitted == ["example.org"]

    def test_generic_rule(self):
        """Rule without domain prefix"""
        rule = ScriptletRule.fromText("#%#//scriptlet('log')", filterId=1, version="1.0")
        assert rule.domains.empty_is()

    def test_params(self):
        """Engine identification is merged with the parsed directive"""
        rule = ScriptletRule.fromText(
            "#%#//scriptlet('set-constant', 'foo', 'true')",
            filterId=1,
            version="4.2.1",
            engineName="test-engine",
        )

        assert rule.params == ScriptletParams(
            engine="test-engine", version="4.2.1", name="set-constant", args=["foo", "true"]
        )
        assert rule.params.as_dict() == {
            "engine": "test-engine",
            "version": "4.2.1",
            "name": "set-constant",
            "args": ["foo", "true"],
        }

    def test_default_engine_name(self):
        """Engine name defaults to configuration"""
        rule = ScriptletRule.fromText("#%#//scriptlet('log')", filterId=1, version="1.0")
        assert rule.params.engine == appsettings.engine_name

    def test_engine_invoked(self):
        """Engine receives the parameters and its script is kept"""
        engine = RecordingEngine()
        rule = ScriptletRule.fromText(
            "#%#//scriptlet('log', 'x')", filterId=1, version="1.0", engine=engine
        )

        assert engine.calls == [
            {"engine": appsettings.engine_name, "version": "1.0", "name": "log", "args": ["x"]}
        ]
        assert rule.script == "/* log */"

    def test_engine_not_invoked_on_malformed(self):
        """Malformed rules never reach the engine"""
        engine = RecordingEngine()
        with pytest.raises(MalformedDirective):
            ScriptletRule.fromText(
                "#%#//scriptlet('log'", filterId=1, version="1.0", engine=engine
            )
        assert engine.calls == []

    def test_custom_parser(self):
        """A configured parser can be passed in"""
        rule = ScriptletRule.fromText(
            "#%#//scriptlet('log')",
            filterId=1,
            version="1.0",
            parser=DirectiveParser(marker="//scriptlet"),
        )
        assert rule.name == "log"

    def test_filter_rule_capability(self):
        """ScriptletRule provides the FilterRule capability"""
        rule = ScriptletRule.fromText("#%#//scriptlet('log')", filterId=1, version="1.0")
        assert isinstance(rule, FilterRule)

    def test_engine_protocol(self):
        """RecordingEngine satisfies the engine protocol"""
        assert isinstance(RecordingEngine(), ScriptletEngine)
