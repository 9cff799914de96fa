from enumrange import Range, enum_range


@enum_range(representation=["C", "u16"])
class RangedEnum:
    Zero = 0
    One = 1
    PrivateUse = Range(10, 20, format="PrivateUse{index}_{value}", range_check="is_private_use")
    Three = 3
    Unassigned = Range(200, 205, format="Unassigned{value}", range_check="is_unassigned")
    WellKnown = Range(206, 210, format="WellKnown{index}", range_check="is_well_known")
    Mdr = 400
    Lol = 401
    Ptdr = 402


if __name__ == "__main__":
    zero = RangedEnum.Zero
    print(f"RangedEnum.Zero is_well_known => {RangedEnum.is_well_known(zero)}")
    print(f"RangedEnum.Zero is_unassigned => {RangedEnum.is_unassigned(zero)}")
    print(f"RangedEnum.Zero is_private_use => {RangedEnum.is_private_use(zero)}")

    pu10 = RangedEnum.PrivateUse0_10
    print(f"RangedEnum.PrivateUse0_10 is_well_known => {pu10.is_well_known()}")
    print(f"RangedEnum.PrivateUse0_10 is_unassigned => {pu10.is_unassigned()}")
    print(f"RangedEnum.PrivateUse0_10 is_private_use => {pu10.is_private_use()}")
