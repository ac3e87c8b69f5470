import logging

from .config import Settings
from .scaler import format_ingredient, scaled_or_base
from .store import open_store


def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level)
    store = open_store(settings)
    recipes = store.start()
    print(f"Loaded {len(recipes)} recipe(s).")
    for r in recipes:
        print(f"- {r.name} (serves {r.current_servings})")
        for ing in scaled_or_base(r):
            print(f"    {format_ingredient(ing)}")


if __name__ == "__main__":
    main()
