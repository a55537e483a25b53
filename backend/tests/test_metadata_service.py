import pytest
from sqlalchemy import delete

from character_manager.db.models.lookup import CharacterMapping, Realm
from character_manager.services import metadata_service


@pytest.mark.parametrize("getter, expected_count", [
    (metadata_service.get_faction_types, 2),
    (metadata_service.get_race_types, 6),
    (metadata_service.get_class_types, 6),
    (metadata_service.get_realms, 5),
    (metadata_service.get_character_mappings, 28),
])
async def test_seeded_tables_are_returned_in_id_order(db_session, getter, expected_count):
    result = await getter(db_session)

    assert result.is_success
    assert len(result.value) == expected_count
    assert [row.id for row in result.value] == list(range(1, expected_count + 1))


async def test_realms_carry_type(db_session):
    result = await metadata_service.get_realms(db_session)

    by_name = {realm.name: realm.type for realm in result.value}
    assert by_name["Wraithwind"] == "PVP"
    assert by_name["Frostgard"] == "Neutral"


@pytest.mark.parametrize("model, getter, message", [
    (Realm, metadata_service.get_realms, "No realms found."),
    (CharacterMapping, metadata_service.get_character_mappings, "No character mappings found."),
])
async def test_empty_table_is_a_failure(db_session, model, getter, message):
    await db_session.execute(delete(model))
    await db_session.commit()

    result = await getter(db_session)

    assert not result.is_success
    assert result.error == message


async def test_lookup_data_bundles_four_tables(db_session):
    result = await metadata_service.get_lookup_data(db_session)

    assert result.is_success
    lookup = result.value
    assert [r.name for r in lookup.race_types] == ["Human", "Dwarf", "Elf", "Orc", "Zombie", "Alien"]
    assert [c.name for c in lookup.class_types][:2] == ["Warrior", "Archer"]
    assert [f.name for f in lookup.faction_types] == ["Light Side", "Dark Side"]
    assert len(lookup.realms) == 5


async def test_lookup_data_with_empty_realms_is_still_success(db_session):
    await db_session.execute(delete(Realm))
    await db_session.commit()

    result = await metadata_service.get_lookup_data(db_session)

    assert result.is_success
    assert result.value.realms == []
