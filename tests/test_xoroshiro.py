from kxo.xoroshiro import DEFAULT_SEED, Xoroshiro128


def test_default_seed():
    assert Xoroshiro128().state == (314159265, 1618033989)
    assert DEFAULT_SEED == (314159265, 1618033989)


def test_deterministic_sequence():
    a, b = Xoroshiro128(), Xoroshiro128()
    assert [a.next_u64() for _ in range(20)] == [b.next_u64() for _ in range(20)]


def test_outputs_are_64_bit():
    rng = Xoroshiro128()
    assert all(0 <= rng.next_u64() < 1 << 64 for _ in range(1000))


def test_zero_state_stays_zero():
    rng = Xoroshiro128(0, 0)
    assert [rng.next_u64() for _ in range(3)] == [0, 0, 0]
    assert rng.state == (0, 0)


def test_reseed_restarts_sequence():
    rng = Xoroshiro128()
    first = [rng.next_u64() for _ in range(5)]
    rng.seed(*DEFAULT_SEED)
    assert [rng.next_u64() for _ in range(5)] == first


def test_seed_masks_to_64_bits():
    rng = Xoroshiro128()
    rng.seed(1 << 64 | 5, 7)
    assert rng.state == (5, 7)


def test_jump_is_deterministic_and_moves_state():
    a, b = Xoroshiro128(), Xoroshiro128()
    a.jump()
    b.jump()
    assert a.state == b.state
    assert a.state != DEFAULT_SEED
    assert a.next_u64() == b.next_u64()


def test_jump_changes_output_stream():
    plain, jumped = Xoroshiro128(), Xoroshiro128()
    jumped.jump()
    assert [plain.next_u64() for _ in range(4)] != [jumped.next_u64() for _ in range(4)]