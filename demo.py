#!/usr/bin/env python3
"""
Demo script for appstate showing basic usage.
"""

import argparse
import logging

from appstate import GlobalState, LocalState


def typed_reads(state):
    """Read values back through the typed accessors."""
    name = state.get_string("name")
    city = state.get_optional("city", str)
    age = state.get_int("age")
    height = state.get_float("height")
    musician = state.get_bool("musician")
    other_cities = state.get_list("otherCities", str)

    print("Name:", name)
    print(f"Age: {age} years old")
    print("City:", city or "Not specified")
    print(f'Height: {height}"')
    print("Is a musician" if musician else "Isn't a musician")
    if other_cities:
        print("-" * 15)
        print("Other Cities:")
        for other_city in other_cities:
            print(other_city)
        print("-" * 15)


def main():
    """Main demo function."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--verbose", action="store_true", help="log container activity")
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    state = LocalState({
        "name": "Justin Reusch",
        "city": None,
        "age": 36,
        "height": 178.4,
        "musician": False,
        "otherCities": ["Austin", "Rockford", "Allendale"],
    })
    typed_reads(state)

    state.set_state("bar", "foo")
    state.set_state(True, "musician")
    state.merge_state({"bar": "baz", "baz": True})
    print("Foo:", state.get_string("foo"))
    print("Bar:", state.get_string("bar"))
    print("Baz:", state.get_bool("baz"))
    print("Is a musician" if state.get_bool("musician") else "Isn't a musician")
    print("Type of age:", state.type_of("age") or "Can't determine type")
    print("Strings:", state.filter_by_type(str))

    base = {"name": "Justin Reusch", "city": None, "age": 36, "height": 178.4, "musician": False}
    state2 = LocalState(base)
    state3 = LocalState(base)
    print("States are equal:", state2 == state3)
    print("State 2 is greater than State 3:", state2 > state3)
    print("State 2 is less than State 3:", state2 < state3)
    print("State 2 is greater than or equal to State 3:", state2 >= state3)
    print("State 2 is less than or equal to State 3:", state2 <= state3)
    print(hash(state), hash(state2), hash(state3))
    removed = state3.remove("age")
    print("Removing:", "Not removed" if removed is None else removed)
    print(state3)

    state4 = GlobalState({"name": "Justin Reusch", "city": None})
    state5 = state4.duplicate()
    state6 = LocalState({"name": "Justin Reusch", "city": None})
    state7 = state6.duplicate()
    state4.set_state("Rockford", "city")
    state6.set_state("Rockford", "city")

    print()
    print("Shared:")
    print("-" * 20)
    print("Original:", state4, "City:", state4.lookup("city", "nil"))
    print("Copy:", state5, "City:", state5.lookup("city", "nil"))
    print()
    print("Independent:")
    print("-" * 20)
    print("Original:", state6)
    print("Copy:", state7)


if __name__ == "__main__":
    main()
