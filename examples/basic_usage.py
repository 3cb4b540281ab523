#!/usr/bin/env python3
"""Example of basic pricing document usage."""

import sys

from ai_pricing import FetchError, get_ai_pricing, pricing_url


def print_provider_prices(env):
    """Print headline prices of every model for an environment.

    Args:
        env: Deployment environment name, e.g. "dev" or "prod"
    """
    document = get_ai_pricing(env)

    print(f"Pricing document: {pricing_url(env)}")
    print(f"Metered price id: {document.metered_price_id}")
    print()

    for provider in document.providers:
        print(f"{provider.label} ({provider.key}), text markup {provider.markup.text_percentage:.0%}")
        for model in provider.models:
            if model.text_pricing is not None:
                rates = model.text_pricing
                print(f"  {model.key}: ${rates.input_per_1m:g} in / ${rates.output_per_1m:g} out per 1M tokens")
            elif model.image_pricing:
                for entry in model.image_pricing:
                    print(f"  {model.key} {entry.size}: ${entry.cost_per_image:g} per image ({entry.description})")
            else:
                print(f"  {model.key}: no pricing published")
        print()


def main():
    """Run the example."""
    env = sys.argv[1] if len(sys.argv) > 1 else "dev"

    try:
        print_provider_prices(env)
    except FetchError as e:
        print(f"Could not load pricing for '{env}': {e}", file=sys.stderr)
        return 1

    # A second call is served from the process cache
    assert get_ai_pricing(env) is get_ai_pricing(env)

    # Bypass the cache to see the latest published document
    fresh = get_ai_pricing(env, bust_cache=True)
    print(f"Fresh copy lists {len(fresh.providers)} providers")
    return 0


if __name__ == "__main__":
    sys.exit(main())
