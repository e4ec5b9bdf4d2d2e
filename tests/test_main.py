from main import build_config, parse_args


def test_defaults():
    args = parse_args([])
    assert args.lines == 20
    assert list(args.size) == [1000, 700]
    assert not args.debug


def test_cli_values_reach_the_config():
    config = build_config(parse_args(["--lines", "8", "--step", "0.1", "--max-steps", "50"]))
    assert config.num_field_lines == 8
    assert config.trace.step_size == 0.1
    assert config.trace.max_steps == 50
