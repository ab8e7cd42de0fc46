"""Pytest fixtures for plexpurchases_builder tests."""

import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from plexpurchases_builder.entities import (
    DeliveryType,
    PurchaseActions,
    PurchaseConfiguration,
    SubscriptionBasis,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_product():
    """A fully populated one-time purchase."""
    return PurchaseConfiguration(
        product_id="vip_rank",
        product_name="VIP Rank",
        product_description="Grants the VIP rank forever",
        repeatable_purchase=False,
        price=500,
        delivery_type=DeliveryType.ALLOW_OFFLINE_DELIVERY,
        actions=PurchaseActions(
            success=("lp user %player_name% parent add vip", "broadcast %player_name% bought VIP"),
        ),
        permission="plexpurchases.vip",
        hide_if_no_permission=True,
        display_item="DIAMOND",
    )


@pytest.fixture
def sample_subscription():
    """A monthly subscription with all three action lists."""
    return PurchaseConfiguration(
        subscription_id="coins-monthly",
        subscription_name="Monthly Coins",
        subscription_description="1000 coins every month",
        subscription_basis=SubscriptionBasis.QUARTERLY,
        price=250,
        actions=PurchaseActions(
            success=("eco give %player_name% 1000",),
            expire=("broadcast %player_name% subscription ended",),
            renew=("eco give %player_name% 1000",),
        ),
        dependency="vip_rank",
        dependency_amount=1,
        display_item="GOLD_INGOT",
    )


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for config loading tests."""
    env_vars = {
        "PLEXPURCHASES_LOG_LEVEL": "debug",
        "PLEXPURCHASES_OUTPUT_DIR": "/tmp/plexpurchases_output",
        "PLEXPURCHASES_ARCHIVE_NAME": "server-configs",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars
