"""
Thin Category Demonstration

Builds a three-object chain C and a single arrow D, then shows:
1. the closed relations of both categories
2. every functor C -> D
3. which pairs of functors are linked by a natural transformation
"""

import logging
import sys

from thin_categories import ThinCategory, exists_transformation, find_all_functors


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def show_category(category):
    print(f"\nCategory {category.name} relations:")
    for obj in category.objects:
        reachable = ", ".join(str(r) for r in category.objects if category.has_arrow(obj, r))
        print(f"  {obj} → {{{reachable}}}")


def main():
    logging.basicConfig(
        level=logging.DEBUG if "-v" in sys.argv else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print_section("Simple Example")

    C = ThinCategory.from_generators(["a", "b", "c"], [("a", "b"), ("b", "c")], name="C")
    D = ThinCategory.from_generators(["x", "y"], [("x", "y")], name="D")

    show_category(C)
    show_category(D)

    functors = find_all_functors(C, D)
    print(f"\nFound {len(functors)} functors:")
    for i, F in enumerate(functors, start=1):
        mapping = " ".join(f"{obj}→{F(obj)}" for obj in C.objects)
        print(f"  Functor {i}: {mapping}")

    print("\nNatural transformations:")
    for i, F in enumerate(functors, start=1):
        for j, G in enumerate(functors, start=1):
            if exists_transformation(F, G):
                print(f"  F{i} ⇒ F{j} exists")


if __name__ == "__main__":
    main()
