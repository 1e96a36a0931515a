from pairdb.schemas.user import UserConfig
from pairdb.schemas.cli import CLIConfig
from pairdb.schemas.param import ParamConfig
from pairdb.schemas.resolve import resolve_config


def test_cli_overrides_do_not_mutate_user():
    user = UserConfig.model_validate({"BACKEND": "sqlite", "SHUFFLE": True, "ROOT_DIR": "/tmp"})

    cli = CLIConfig.model_validate({"backend": "lmdb"})

    internal = resolve_config(ParamConfig(), user, cli)

    # CLI should take precedence
    assert internal.store.backend == "lmdb"

    # But the original user model should remain unchanged
    assert user.backend == "sqlite"


def test_cli_minimal_overrides_root_dir():
    """CLI root_dir override should work correctly."""
    user = UserConfig(root_dir="/data/a", batch_size=50)
    cli = CLIConfig(root_dir="/data/b")

    config = resolve_config(ParamConfig(), user, cli)

    assert config.image.root_dir == "/data/b"  # CLI wins
    assert config.store.batch_size == 50  # User value preserved


def test_cli_gray_overrides_nested_user_image():
    """CLI gray flag beats a nested user image section."""
    user = UserConfig.model_validate({"image": {"grayscale": False, "resize_width": 32}})
    cli = CLIConfig(gray=True)

    config = resolve_config(ParamConfig(), user, cli)

    assert config.image.grayscale is True
    assert config.image.resize_width == 32


def test_cli_precedence_no_user_config():
    """CLI should work even without UserConfig."""
    cli = CLIConfig(shuffle=True, seed=5, orphan_labels="drop")

    config = resolve_config(ParamConfig(), None, cli)

    assert config.manifest.shuffle is True
    assert config.manifest.seed == 5
    assert config.pipeline.orphan_labels == "drop"


def test_cli_only_overrides_specified_fields():
    """CLI should only override fields that are explicitly set."""
    user = UserConfig(
        backend="sqlite",
        shuffle=True,
        resize_height=16,
        resize_width=16,
    )

    # CLI only sets resize_width
    cli = CLIConfig(resize_width=24)

    config = resolve_config(ParamConfig(), user, cli)

    assert config.image.resize_width == 24  # CLI override
    assert config.image.resize_height == 16  # User value preserved
    assert config.store.backend == "sqlite"  # User value preserved
    assert config.manifest.shuffle is True
