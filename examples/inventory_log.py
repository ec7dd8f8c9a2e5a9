import logging
from typing import Any, Hashable, MutableMapping, Tuple

import tabletracker

# Show the library's own debug messages next to ours.
logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
logging.getLogger("tabletracker").setLevel(logging.DEBUG)


def log_change(path: Tuple[Hashable, ...], old: Any, new: Any, container: MutableMapping) -> None:
    where = ".".join(str(key) for key in path)
    print(f"  {where}: {old!r} -> {new!r}")


inventory = {
    "owner": "Ada",
    "gold": 12,
    "bag": {1: {"name": "rope", "count": 1}, 2: {"name": "torch", "count": 3}},
}
state = tabletracker.track(inventory, log_change)

print("Spend some gold:")
state["gold"] = 7

print("Use a torch:")
state["bag"][2]["count"] = 2

print("Pick up a map at the front of the bag:")
tabletracker.insert(state["bag"], 1, {"name": "map", "count": 1})

print("Drop the rope:")
rope_slot = next(slot for slot, item in tabletracker.ipairs(state["bag"]) if item["name"] == "rope")
dropped = tabletracker.remove(state["bag"], rope_slot)
print(f"  dropped {dropped['name']}")

print("Walk the bag:")
for slot, item in tabletracker.ipairs(state["bag"]):
    print(f"  slot {slot}: {item['name']} x{item['count']} (path {item.path})")

print("Quietly stash a note (no notification):")
tabletracker.deep_update(state, ["notes", "day1"], "found a cave")

snapshot = tabletracker.get_raw(state)
print(f"Snapshot: {snapshot}")
print(f"The tracked view prints as {state}")
