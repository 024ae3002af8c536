"""Fixed game parameters."""

# Face value of each place, in place order. A card's value is the index
# of the place it belongs to.
PLACE_VALUES = (2, 2, 2, 3, 3, 4, 5)
NUM_PLACES = len(PLACE_VALUES)

# One card per face value point: 21 cards.
DECK_SIZE = sum(PLACE_VALUES)

HAND_SIZE = 6  # Dealt to each player at reset
MAX_HAND_SIZE = 7  # Dealt hand plus the turn draw

WINNING_POINTS = 11
WINNING_PLACES = 4
