import unittest

from justhtml.node import Element

from domsanitize import DEFAULT_POLICY, ElementAction, SanitizePolicy, classify, classify_element, is_custom_element


class TestClassify(unittest.TestCase):
    def test_unlisted_elements_are_allowed(self) -> None:
        assert classify("div", False, SanitizePolicy()) is ElementAction.ALLOW

    def test_allow_wins_over_block_and_drop(self) -> None:
        policy = SanitizePolicy(allow_elements=["b"], block_elements=["b"], drop_elements=["b"])
        assert classify("b", False, policy) is ElementAction.ALLOW

    def test_block_wins_over_drop(self) -> None:
        policy = SanitizePolicy(block_elements=["b"], drop_elements=["b"])
        assert classify("b", False, policy) is ElementAction.BLOCK

    def test_drop(self) -> None:
        policy = SanitizePolicy(drop_elements=["iframe"])
        assert classify("iframe", False, policy) is ElementAction.DROP
        assert classify("IFRAME", False, policy) is ElementAction.DROP

    def test_custom_element_wildcard(self) -> None:
        policy = SanitizePolicy(drop_elements=["*-"])
        assert classify("x-widget", True, policy) is ElementAction.DROP
        assert classify("div", False, policy) is ElementAction.ALLOW

    def test_allowed_custom_wildcard_shadows_dropped_tag(self) -> None:
        policy = SanitizePolicy(allow_elements=["*-"], drop_elements=["x-widget"])
        assert classify("x-widget", True, policy) is ElementAction.ALLOW

    def test_exact_tag_in_block_does_not_beat_custom_wildcard_in_allow(self) -> None:
        policy = SanitizePolicy(allow_elements=["*-"], block_elements=["my-el"])
        assert classify("my-el", True, policy) is ElementAction.ALLOW

    def test_is_custom_element(self) -> None:
        assert is_custom_element(Element("custom-widget", {}, "html"))
        assert is_custom_element(Element("button", {"is": "fancy-button"}, "html"))
        assert is_custom_element(Element("button", {"IS": "fancy-button"}, "html"))
        assert not is_custom_element(Element("button", {"type": "submit"}, "html"))

    def test_classify_element_uses_is_attribute(self) -> None:
        node = Element("button", {"is": "fancy-button"}, "html")
        assert classify_element(node, DEFAULT_POLICY) is ElementAction.DROP
        assert classify_element(Element("button", {}, "html"), DEFAULT_POLICY) is ElementAction.ALLOW

    def test_element_action_values(self) -> None:
        assert ElementAction.ALLOW == "allow"
        assert ElementAction.BLOCK == "block"
        assert ElementAction.DROP == "drop"
