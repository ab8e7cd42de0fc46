"""Static catalog of Minecraft items selectable as a configuration's display item."""

from dataclasses import dataclass

IMAGE_URL_TEMPLATE = "https://static.minecraftitemids.com/64/{}.png"


@dataclass(frozen=True)
class CatalogItem:
    id: str
    display_name: str
    image_url: str


def format_display_name(item_id: str) -> str:
    """GOLD_INGOT -> Gold Ingot"""
    return " ".join(word.capitalize() for word in item_id.lower().split("_"))


def _item(item_id: str) -> CatalogItem:
    return CatalogItem(
        id=item_id,
        display_name=format_display_name(item_id),
        image_url=IMAGE_URL_TEMPLATE.format(item_id.lower()),
    )


_ITEM_IDS: tuple[str, ...] = (
    "DIAMOND", "EMERALD", "GOLD_INGOT", "IRON_INGOT", "COAL", "REDSTONE",
    "LAPIS_LAZULI", "NETHERITE_INGOT", "BEDROCK", "COBBLESTONE", "STONE", "DIRT",
    "GRASS_BLOCK", "SAND", "GRAVEL", "CLAY", "OAK_LOG", "SPRUCE_LOG",
    "BIRCH_LOG", "JUNGLE_LOG", "ACACIA_LOG", "DARK_OAK_LOG", "DIAMOND_SWORD", "IRON_SWORD",
    "GOLDEN_SWORD", "STONE_SWORD", "WOODEN_SWORD", "NETHERITE_SWORD", "DIAMOND_PICKAXE", "IRON_PICKAXE",
    "GOLDEN_PICKAXE", "STONE_PICKAXE", "WOODEN_PICKAXE", "NETHERITE_PICKAXE", "DIAMOND_SHOVEL", "IRON_SHOVEL",
    "GOLDEN_SHOVEL", "STONE_SHOVEL", "WOODEN_SHOVEL", "NETHERITE_SHOVEL", "DIAMOND_HELMET", "IRON_HELMET",
    "GOLDEN_HELMET", "DIAMOND_CHESTPLATE", "IRON_CHESTPLATE", "GOLDEN_CHESTPLATE", "NETHERITE_HELMET", "NETHERITE_CHESTPLATE",
    "NETHERITE_LEGGINGS", "NETHERITE_BOOTS", "IRON_LEGGINGS", "IRON_BOOTS", "DIAMOND_LEGGINGS", "DIAMOND_BOOTS",
    "DIAMOND_AXE", "IRON_AXE", "GOLDEN_AXE", "STONE_AXE", "WOODEN_AXE", "NETHERITE_AXE",
    "ENDER_PEARL", "ENDER_EYE", "ENDER_CHEST", "BEACON", "NETHER_STAR", "DRAGON_EGG",
    "TOTEM_OF_UNDYING", "BOW", "ARROW", "SPECTRAL_ARROW", "TIPPED_ARROW", "BOOK",
    "ENCHANTED_BOOK", "EXPERIENCE_BOTTLE", "GOLDEN_APPLE", "ENCHANTED_GOLDEN_APPLE", "POTION", "SPLASH_POTION",
    "COMPASS", "CLOCK", "MAP", "TORCH", "LANTERN", "CHEST",
    "TRAPPED_CHEST", "SHULKER_BOX", "CONDUIT", "RESPAWN_ANCHOR", "TRIDENT", "BLAZE_ROD",
    "BLAZE_POWDER", "GHAST_TEAR", "MAGMA_CREAM", "SLIME_BALL", "GUNPOWDER", "STRING",
    "FEATHER", "FLINT", "CLAY_BALL", "SNOWBALL", "EGG", "MILK_BUCKET",
    "WATER_BUCKET", "LAVA_BUCKET", "BUCKET", "BREAD", "COOKIE", "CAKE",
    "PUMPKIN_PIE", "MELON_SLICE", "APPLE", "GOLDEN_CARROT", "COOKED_BEEF", "COOKED_CHICKEN",
    "COOKED_PORKCHOP", "BEEF", "CHICKEN", "PORKCHOP", "HONEY_BOTTLE", "HONEYCOMB",
    "SWEET_BERRIES", "GLOW_BERRIES", "CHORUS_FRUIT", "POPPED_CHORUS_FRUIT", "DRIED_KELP", "OBSIDIAN",
    "GLASS", "GLASS_PANE", "WOOL", "CARPET", "BED", "FURNACE",
    "CRAFTING_TABLE", "ANVIL", "ENCHANTING_TABLE", "BOOKSHELF", "PAINTING", "ITEM_FRAME",
    "ARMOR_STAND", "SIGN", "LADDER", "FENCE", "FENCE_GATE", "DOOR",
    "TRAPDOOR", "STAIRS", "SLAB", "WALL", "BUTTON", "LEVER",
    "PRESSURE_PLATE", "REDSTONE_TORCH", "REDSTONE_BLOCK", "REPEATER", "COMPARATOR", "DISPENSER",
    "DROPPER", "HOPPER", "PISTON", "STICKY_PISTON", "OBSERVER", "TARGET",
    "DAYLIGHT_DETECTOR", "NOTE_BLOCK", "JUKEBOX", "MUSIC_DISC", "RECORD_PLAYER", "CAULDRON",
    "BREWING_STAND", "SPIDER_EYE", "FERMENTED_SPIDER_EYE", "GLOWSTONE_DUST", "GLOWSTONE", "SEA_LANTERN",
    "END_ROD", "REDSTONE_LAMP", "CROSSBOW", "SHIELD", "ELYTRA", "PHANTOM_MEMBRANE",
    "TURTLE_HELMET", "SCUTE", "NAUTILUS_SHELL", "HEART_OF_THE_SEA", "SEA_PICKLE", "TROPICAL_FISH",
    "PUFFERFISH", "SALMON", "COD", "COOKED_SALMON", "COOKED_COD", "KELP",
    "SEAGRASS", "CORAL", "CORAL_BLOCK", "CORAL_FAN", "DEAD_CORAL", "DEAD_CORAL_BLOCK",
    "DEAD_CORAL_FAN", "BRAIN_CORAL", "BUBBLE_CORAL", "FIRE_CORAL", "HORN_CORAL", "TUBE_CORAL",
    "BRAIN_CORAL_BLOCK", "BUBBLE_CORAL_BLOCK", "FIRE_CORAL_BLOCK", "HORN_CORAL_BLOCK", "TUBE_CORAL_BLOCK", "BRAIN_CORAL_FAN",
    "BUBBLE_CORAL_FAN", "FIRE_CORAL_FAN", "HORN_CORAL_FAN", "TUBE_CORAL_FAN", "DEAD_BRAIN_CORAL", "DEAD_BUBBLE_CORAL",
    "DEAD_FIRE_CORAL", "DEAD_HORN_CORAL", "DEAD_TUBE_CORAL", "DEAD_BRAIN_CORAL_BLOCK", "DEAD_BUBBLE_CORAL_BLOCK", "DEAD_FIRE_CORAL_BLOCK",
    "DEAD_HORN_CORAL_BLOCK", "DEAD_TUBE_CORAL_BLOCK", "DEAD_BRAIN_CORAL_FAN", "DEAD_BUBBLE_CORAL_FAN", "DEAD_FIRE_CORAL_FAN", "DEAD_HORN_CORAL_FAN",
    "DEAD_TUBE_CORAL_FAN",
)

DISPLAY_ITEMS: tuple[CatalogItem, ...] = tuple(
    sorted((_item(i) for i in _ITEM_IDS), key=lambda item: item.display_name)
)

_BY_ID: dict[str, CatalogItem] = {item.id: item for item in DISPLAY_ITEMS}


def exists(item_id: str) -> bool:
    return item_id in _BY_ID


def get_item(item_id: str) -> CatalogItem | None:
    return _BY_ID.get(item_id)


def search(text: str) -> list[CatalogItem]:
    """Case-insensitive substring match on id or display name."""
    needle = text.strip().lower()
    if not needle:
        return list(DISPLAY_ITEMS)
    return [
        item for item in DISPLAY_ITEMS
        if needle in item.id.lower() or needle in item.display_name.lower()
    ]
