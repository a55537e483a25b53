from sqladmin import Admin, ModelView

from character_manager.db.models.user import User
from character_manager.db.models.character import Character
from character_manager.db.models.lookup import FactionType, RaceType, ClassType, Realm, CharacterMapping

class UserAdmin(ModelView, model=User):
    column_list = [User.id, User.username, User.role, User.created_at]
    column_searchable_list = [User.username]
    # 해시와 토큰은 관리 화면에서도 숨김
    column_details_exclude_list = [User.password_hash, User.refresh_token]
    form_excluded_columns = [User.password_hash, User.refresh_token, User.refresh_token_expiration]
    icon = "fa-solid fa-user"

class CharacterAdmin(ModelView, model=Character):
    column_list = [Character.id, Character.user_id, Character.name, Character.level,
                   Character.faction_id, Character.race_id, Character.class_id, Character.realm_id]
    column_searchable_list = [Character.name]
    column_sortable_list = [Character.level]
    icon = "fa-solid fa-person"

class FactionTypeAdmin(ModelView, model=FactionType):
    column_list = [FactionType.id, FactionType.name]
    can_create = False
    can_delete = False
    icon = "fa-solid fa-flag"

class RaceTypeAdmin(ModelView, model=RaceType):
    column_list = [RaceType.id, RaceType.name]
    can_create = False
    can_delete = False
    icon = "fa-solid fa-dna"

class ClassTypeAdmin(ModelView, model=ClassType):
    column_list = [ClassType.id, ClassType.name]
    can_create = False
    can_delete = False
    icon = "fa-solid fa-hat-wizard"

class RealmAdmin(ModelView, model=Realm):
    column_list = [Realm.id, Realm.name, Realm.type]
    can_create = False
    can_delete = False
    icon = "fa-solid fa-globe"

class CharacterMappingAdmin(ModelView, model=CharacterMapping):
    column_list = [CharacterMapping.id, CharacterMapping.faction_id,
                   CharacterMapping.race_id, CharacterMapping.class_id]
    can_create = False
    can_edit = False
    can_delete = False
    icon = "fa-solid fa-table"

ADMIN_VIEWS = [
    UserAdmin,
    CharacterAdmin,
    FactionTypeAdmin,
    RaceTypeAdmin,
    ClassTypeAdmin,
    RealmAdmin,
    CharacterMappingAdmin,
]

def mount_admin(app, engine, authentication_backend) -> Admin:
    """/admin 경로에 관리자 화면을 연결합니다."""
    admin = Admin(app, engine, title="Character Manager Admin",
                  authentication_backend=authentication_backend)
    for view in ADMIN_VIEWS:
        admin.add_view(view)
    return admin
