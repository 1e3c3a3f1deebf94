"""Internal species keys and the iNaturalist names/IDs that map onto them.

One entry per internal species. A single key may collect several
iNaturalist taxa (e.g. every morel species maps to ``morels``). Where two
entries list the same name or taxon ID, the entry appearing later in
``TAXONOMY`` takes precedence when the lookup indexes are built.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TaxonomyEntry:
    species_key: str
    scientific_names: tuple[str, ...]
    common_names: tuple[str, ...]
    external_taxon_ids: tuple[int, ...]


TAXONOMY: tuple[TaxonomyEntry, ...] = (
    TaxonomyEntry(
        "morels",
        (
            "Morchella americana",
            "Morchella angusticeps",
            "Morchella elata",
            "Morchella punctipes",
            "Morchella esculenta",
            "Morchella conica",
            "Morchella rufobrunnea",
        ),
        ("Black Morel", "Yellow Morel", "Half-free Morel", "Common Morel", "Morel"),
        (47378, 121653, 121655, 47379, 343400),
    ),
    TaxonomyEntry(
        "chanterelles",
        (
            "Cantharellus cinnabarinus",
            "Cantharellus flavus",
            "Cantharellus lateritius",
            "Cantharellus cibarius",
            "Cantharellus formosus",
            "Cantharellus roseocanus",
            "Cantharellus enelensis",
            "Craterellus tubaeformis",
        ),
        (
            "Red Chanterelle",
            "Smooth Chanterelle",
            "Golden Chanterelle",
            "Pacific Golden Chanterelle",
            "Rainbow Chanterelle",
            "Yellowfoot",
            "Winter Chanterelle",
            "Chanterelle",
        ),
        (47718, 47719, 343238, 49628, 117770, 120443, 499666, 350511),
    ),
    TaxonomyEntry(
        "blacktrumpets",
        ("Craterellus fallax", "Craterellus cornucopioides", "Craterellus calicornucopioides"),
        ("Black Trumpet", "Horn of Plenty", "Trumpet of Death"),
        (48785, 48786, 343142),
    ),
    TaxonomyEntry(
        "beefsteak",
        ("Fistulina hepatica",),
        ("Beefsteak Polypore", "Beefsteak Fungus", "Ox Tongue"),
        (55074,),
    ),
    TaxonomyEntry(
        "cauliflower",
        ("Sparassis spathulata", "Sparassis herbstii", "Sparassis crispa"),
        ("Cauliflower Mushroom", "Wood Cauliflower"),
        (49283, 194521, 194522),
    ),
    TaxonomyEntry(
        "matsutake",
        ("Tricholoma matsutake", "Tricholoma magnivelare"),
        ("Matsutake", "Pine Mushroom", "American Matsutake"),
        (49836, 49837),
    ),
    TaxonomyEntry(
        "lobster",
        ("Hypomyces lactifluorum",),
        ("Lobster Mushroom",),
        (48215,),
    ),
    TaxonomyEntry(
        "trumpetchanterelle",
        ("Craterellus tubaeformis",),
        ("Yellowfoot", "Winter Chanterelle", "Trumpet Chanterelle"),
        (350511,),
    ),
    TaxonomyEntry(
        "sweettooth",
        ("Hydnum subolympicum",),
        ("Sweet Tooth", "Hedgehog Mushroom"),
        (793363,),
    ),
    TaxonomyEntry(
        "depressedhedgehog",
        ("Hydnum umbilicatum",),
        ("Depressed Hedgehog", "Belly Button Hedgehog"),
        (48421,),
    ),
    TaxonomyEntry(
        "whitehedgehog",
        ("Hydnum albidum",),
        ("White Hedgehog",),
        (351036,),
    ),
    TaxonomyEntry(
        "jellyear",
        ("Auricularia americana",),
        ("Jelly Tree Ear", "Wood Ear", "Tree Ear"),
        (356394,),
    ),
    TaxonomyEntry(
        "boletusSubcaerulescens",
        ("Boletus subcaerulescens",),
        ("Pine King Bolete", "Almost Bluing King Bolete"),
        (194181,),
    ),
    TaxonomyEntry(
        "boletusVariipes",
        ("Boletus variipes",),
        ("Two-colored King Bolete", "Variable-footed King Bolete"),
        (194218,),
    ),
    TaxonomyEntry(
        "boletusEdulis",
        ("Boletus edulis", "Boletus edulis var. chippewaensis"),
        ("King Bolete", "Porcini", "Penny Bun", "Chippewa King Bolete"),
        (48701, 543052),
    ),
    TaxonomyEntry(
        "boletusAtkinsonii",
        ("Boletus atkinsonii",),
        ("Atkinson's King Bolete", "Cracked King Bolete"),
        (350203,),
    ),
    TaxonomyEntry(
        "boletus_separans",
        ("Boletus separans",),
        ("Lilac-tinted King Bolete", "Lilac Bolete"),
        (350217,),
    ),
    TaxonomyEntry(
        "boletusNobilis",
        ("Boletus nobilis",),
        ("Noble King Bolete", "Tall King Bolete"),
        (500013,),
    ),
    TaxonomyEntry(
        "boletusChippewaensis",
        ("Boletus chippewaensis",),
        ("Chippewa King Bolete", "Hemlock King Bolete"),
        (543052,),
    ),
    TaxonomyEntry(
        "hericium",
        ("Hericium erinaceus",),
        ("Lion's Mane Mushroom", "Bearded Tooth Mushroom"),
        (1520823,),
    ),
    TaxonomyEntry(
        "maitake",
        ("Grifola frondosa",),
        ("Hen of the Woods", "Maitake"),
        (53714,),
    ),
    TaxonomyEntry(
        "blewit",
        ("Lepista nuda", "Collybia nuda"),
        ("Blewit", "Wood Blewit"),
        (1525548,),
    ),
    TaxonomyEntry(
        "oyster",
        ("Pleurotus ostreatus",),
        ("Oyster Mushroom",),
        (1196165,),
    ),
    TaxonomyEntry(
        "winecap",
        ("Stropharia rugosoannulata",),
        ("Wine-cap Stropharia", "King Stropharia"),
        (119151,),
    ),
    TaxonomyEntry(
        "shaggymane",
        ("Coprinus comatus",),
        ("Shaggy Mane", "Lawyer's Wig"),
        (47392,),
    ),
    TaxonomyEntry(
        "corrugatedmilky",
        ("Lactifluus corrugis",),
        ("Corrugated-cap Milky",),
        (351317,),
    ),
    TaxonomyEntry(
        "orangemilky",
        ("Lactifluus hygrophoroides",),
        ("Hygrophorus Milkcap", "Orange Milky"),
        (351320,),
    ),
    TaxonomyEntry(
        "tawnymilky",
        ("Lactifluus volemus",),
        ("Weeping Milk Cap", "Tawny Milky", "Voluminous Milky"),
        (1366740,),
    ),
)
