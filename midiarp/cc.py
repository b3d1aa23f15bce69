"""Control change controller numbers and their names."""

OFF = 0
ON = 127

# Continuous controllers (MSB; the matching LSB is 32 higher).
BANK_SELECT_MSB = 0
MODULATION_WHEEL_MSB = 1
BREATH_CONTROLLER_MSB = 2
FOOT_PEDAL_MSB = 4
PORTAMENTO_TIME_MSB = 5
DATA_ENTRY_MSB = 6
VOLUME_MSB = 7
BALANCE_MSB = 8
PAN_POSITION_MSB = 10
EXPRESSION_MSB = 11
EFFECT_CONTROL1_MSB = 12
EFFECT_CONTROL2_MSB = 13

_LSB_OFFSET = 32

BANK_SELECT_LSB = BANK_SELECT_MSB + _LSB_OFFSET
MODULATION_WHEEL_LSB = MODULATION_WHEEL_MSB + _LSB_OFFSET
BREATH_CONTROLLER_LSB = BREATH_CONTROLLER_MSB + _LSB_OFFSET
FOOT_PEDAL_LSB = FOOT_PEDAL_MSB + _LSB_OFFSET
PORTAMENTO_TIME_LSB = PORTAMENTO_TIME_MSB + _LSB_OFFSET
DATA_ENTRY_LSB = DATA_ENTRY_MSB + _LSB_OFFSET
VOLUME_LSB = VOLUME_MSB + _LSB_OFFSET
BALANCE_LSB = BALANCE_MSB + _LSB_OFFSET
PAN_POSITION_LSB = PAN_POSITION_MSB + _LSB_OFFSET
EXPRESSION_LSB = EXPRESSION_MSB + _LSB_OFFSET
EFFECT_CONTROL1_LSB = EFFECT_CONTROL1_MSB + _LSB_OFFSET
EFFECT_CONTROL2_LSB = EFFECT_CONTROL2_MSB + _LSB_OFFSET

GENERAL_PURPOSE_SLIDER1, GENERAL_PURPOSE_SLIDER2, GENERAL_PURPOSE_SLIDER3, GENERAL_PURPOSE_SLIDER4 = range(16, 20)

(
    SOUND_VARIATION,
    SOUND_TIMBRE,
    SOUND_RELEASE_TIME,
    SOUND_ATTACK_TIME,
    SOUND_BRIGHTNESS,
    SOUND_CONTROL6,
    SOUND_CONTROL7,
    SOUND_CONTROL8,
    SOUND_CONTROL9,
    SOUND_CONTROL10,
) = range(70, 80)

EFFECTS_LEVEL, TREMULO_LEVEL, CHORUS_LEVEL, CELESTE_LEVEL, PHASER_LEVEL = range(91, 96)
DATA_BUTTON_INCREMENT, DATA_BUTTON_DECREMENT = range(96, 98)
(
    NON_REGISTERED_PARAMETER_LSB,
    NON_REGISTERED_PARAMETER_MSB,
    REGISTERED_PARAMETER_LSB,
    REGISTERED_PARAMETER_MSB,
) = range(98, 102)

# Mode messages: send with a value of OFF unless noted.
ALL_SOUND_OFF = 120
ALL_CONTROLLERS_OFF = 121
ALL_NOTES_OFF = 123
OMNI_MODE_OFF = 124
OMNI_MODE_ON = 125
MONO_OPERATION = 126
POLY_OPERATION = 127

# Switches: send with a value of ON or OFF.
LOCAL_KEYBOARD_SWITCH = 122
(
    HOLD_PEDAL_SWITCH,
    PORTAMENTO_SWITCH,
    SUSTENUTO_PEDAL_SWITCH,
    SOFT_PEDAL_SWITCH,
    LEGATO_PEDAL_SWITCH,
    HOLD2_PEDAL_SWITCH,
) = range(64, 70)
(
    GENERAL_PURPOSE_BUTTON1_SWITCH,
    GENERAL_PURPOSE_BUTTON2_SWITCH,
    GENERAL_PURPOSE_BUTTON3_SWITCH,
    GENERAL_PURPOSE_BUTTON4_SWITCH,
) = range(80, 84)


def _build_names() -> dict[int, str]:
    names: dict[int, str] = {}

    paired = {
        BANK_SELECT_MSB: "Bank Select",
        MODULATION_WHEEL_MSB: "Modulation Wheel",
        BREATH_CONTROLLER_MSB: "Breath controller",
        FOOT_PEDAL_MSB: "Foot Pedal",
        PORTAMENTO_TIME_MSB: "Portamento Time",
        DATA_ENTRY_MSB: "Data Entry",
        VOLUME_MSB: "Volume",
        BALANCE_MSB: "Balance",
        PAN_POSITION_MSB: "Pan position",
        EXPRESSION_MSB: "Expression",
        EFFECT_CONTROL1_MSB: "Effect Control 1",
        EFFECT_CONTROL2_MSB: "Effect Control 2",
    }
    for msb, base in paired.items():
        names[msb] = f"{base} (MSB)"
        names[msb + _LSB_OFFSET] = f"{base} (LSB)"

    for number, controller in enumerate(range(GENERAL_PURPOSE_SLIDER1, GENERAL_PURPOSE_SLIDER4 + 1), 1):
        names[controller] = f"General Purpose Slider {number}"

    switches = ("Hold Pedal", "Portamento", "Sustenuto Pedal", "Soft Pedal", "Legato Pedal", "Hold 2 Pedal")
    for controller, base in zip(range(HOLD_PEDAL_SWITCH, HOLD2_PEDAL_SWITCH + 1), switches):
        names[controller] = f"{base} (on/off)"

    sound = ("Variation", "Timbre", "Release Time", "Attack Time", "Brightness")
    sound += tuple(f"Control {n}" for n in range(6, 11))
    for controller, base in zip(range(SOUND_VARIATION, SOUND_CONTROL10 + 1), sound):
        names[controller] = f"Sound {base}"

    for number, controller in enumerate(
        range(GENERAL_PURPOSE_BUTTON1_SWITCH, GENERAL_PURPOSE_BUTTON4_SWITCH + 1), 1
    ):
        names[controller] = f"General Purpose Button {number} (on/off)"

    levels = ("Effects", "Tremulo", "Chorus", "Celeste", "Phaser")
    for controller, base in zip(range(EFFECTS_LEVEL, PHASER_LEVEL + 1), levels):
        names[controller] = f"{base} Level"

    names[DATA_BUTTON_INCREMENT] = "Data Button increment"
    names[DATA_BUTTON_DECREMENT] = "Data Button decrement"

    for prefix, lsb in (("Non-registered", NON_REGISTERED_PARAMETER_LSB), ("Registered", REGISTERED_PARAMETER_LSB)):
        names[lsb] = f"{prefix} Parameter (LSB)"
        names[lsb + 1] = f"{prefix} Parameter (MSB)"

    names.update(
        {
            ALL_SOUND_OFF: "All Sound Off",
            ALL_CONTROLLERS_OFF: "All Controllers Off",
            LOCAL_KEYBOARD_SWITCH: "Local Keyboard (on/off)",
            ALL_NOTES_OFF: "All Notes Off",
            OMNI_MODE_OFF: "Omni Mode Off",
            OMNI_MODE_ON: "Omni Mode On",
            MONO_OPERATION: "Mono Operation",
            POLY_OPERATION: "Poly Operation",
        }
    )
    return dict(sorted(names.items()))


CONTROL_CHANGE_NAMES: dict[int, str] = _build_names()


def control_change_name(controller: int) -> str:
    """Return the name of a controller number, or an empty string if it has none."""
    return CONTROL_CHANGE_NAMES.get(controller, "")