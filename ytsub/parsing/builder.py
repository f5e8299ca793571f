"""
Builds the final subscription list from a tokenized document.
"""

from ytsub.models.subscription import (
    Document,
    GlobalConfig,
    Subscription,
    SubscriptionSet,
)

from .directives import (
    merge_arguments,
    merge_organize_rules,
    resolve_directives,
)
from .tokenizer import tokenize_document


def build_global_config(document: Document) -> GlobalConfig:
    arguments, rules = resolve_directives(document.preamble, "global")
    return GlobalConfig(arguments=arguments, organize_rules=rules)


def build_subscriptions(document: Document) -> SubscriptionSet:
    """
    Resolves every section against the global configuration.

    Arguments are concatenated (global first) and organize rules are overlaid,
    local keys replacing global ones. Sections with the same name stay separate.
    """
    global_config = build_global_config(document)
    subscriptions = []
    for section in document.sections:
        arguments, rules = resolve_directives(section.front_matter, f"[{section.name}]")
        subscriptions.append(
            Subscription(
                name=section.name,
                arguments=merge_arguments(global_config.arguments, arguments),
                organize_rules=merge_organize_rules(global_config.organize_rules, rules),
                urls=list(section.body),
            )
        )
    return SubscriptionSet(global_config=global_config, subscriptions=subscriptions)


def parse_subscriptions(text: str) -> SubscriptionSet:
    """Tokenizes and resolves the full text of a subscriptions file."""
    return build_subscriptions(tokenize_document(text))
