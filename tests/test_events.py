from chordimouse.events import Event, Input


def test_each_input_is_a_distinct_single_bit():
    values = [int(member) for member in Input]
    assert len(set(values)) == len(values)
    assert all(value & (value - 1) == 0 for value in values)
    assert [Input(value) for value in values] == list(Input)


def test_chord_decomposes_into_members():
    chord = Input(0x0011)
    assert Input.BUTTON_1 in chord
    assert Input.MIDDLE_BUTTON_1 in chord
    assert Input.BUTTON_2 not in chord


def test_chord_combination_is_int_compatible():
    chord = Input(0x0005)
    assert chord == Input.BUTTON_1 | Input.BUTTON_3
    assert chord == Input.BUTTON_1.value | Input.BUTTON_3.value
    assert chord & Input.BUTTON_3 == Input.BUTTON_3


def test_empty_event_is_falsy_and_press_is_truthy():
    assert not Event(0)
    assert Event.PRESS
    assert Event(0x0002) is Event.RELEASE