import pytest
from apps.stores.models import Store, StoreOwnerAssignment
from apps.stores.services import (
    create_store,
    update_store,
    deactivate_store,
    get_store_by_id,
    visible_stores,
    accessible_store_ids,
    user_can_access_store,
    assign_owner,
    remove_assignment,
    get_owner_profiles,
    StoreNotFoundError,
    DuplicateStoreCodeError,
    AlreadyAssignedError,
    AssignmentNotFoundError,
    NotAnOwnerError,
    UserNotFoundError,
)


@pytest.mark.django_db
class TestStoreManagement:

    def test_create_store(self):
        store = create_store(name='Iconi', code='ICN')

        assert store.is_active is True
        assert Store.objects.filter(code='ICN').exists()

    def test_create_store_duplicate_code(self, store):
        with pytest.raises(DuplicateStoreCodeError):
            create_store(name='Another', code=store.code)

    def test_update_store(self, store):
        updated = update_store(store_id=store.id, name='Moroni Nord')

        assert updated.name == 'Moroni Nord'
        assert updated.code == store.code

    def test_update_store_code_conflict(self, store, second_store):
        with pytest.raises(DuplicateStoreCodeError):
            update_store(store_id=second_store.id, code=store.code)

    def test_update_missing_store(self):
        import uuid
        with pytest.raises(StoreNotFoundError):
            update_store(store_id=uuid.uuid4(), name='Ghost')

    def test_deactivate_store_keeps_row(self, store):
        deactivate_store(store_id=store.id)

        store.refresh_from_db()
        assert store.is_active is False
        assert get_store_by_id(store_id=store.id) == store


@pytest.mark.django_db
class TestVisibility:

    def test_admin_sees_all_active(self, admin_user, store, second_store, inactive_store):
        stores = list(visible_stores(user=admin_user))

        assert store in stores
        assert second_store in stores
        assert inactive_store not in stores

    def test_admin_can_include_inactive(self, admin_user, inactive_store):
        assert inactive_store in visible_stores(user=admin_user, include_inactive=True)

    def test_owner_sees_assigned_only(self, owner_user, store, second_store, assignment):
        assert list(visible_stores(user=owner_user)) == [store]

    def test_accessible_store_ids(self, admin_user, owner_user, store, assignment):
        assert accessible_store_ids(user=admin_user) is None
        assert accessible_store_ids(user=owner_user) == [store.id]

    def test_user_can_access_store(self, owner_user, store, second_store, assignment):
        assert user_can_access_store(user=owner_user, store_id=store.id) is True
        assert user_can_access_store(user=owner_user, store_id=second_store.id) is False


@pytest.mark.django_db
class TestOwnerAssignment:

    def test_assign_owner(self, store, owner_user):
        assignment = assign_owner(store_id=store.id, user_id=owner_user.id)

        assert assignment.store == store
        assert store.has_owner(owner_user)

    def test_duplicate_assignment_is_conflict(self, store, owner_user, assignment):
        with pytest.raises(AlreadyAssignedError) as exc_info:
            assign_owner(store_id=store.id, user_id=owner_user.id)

        assert str(exc_info.value) == 'Ce propriétaire est déjà assigné à ce magasin'
        assert StoreOwnerAssignment.objects.filter(store=store, user=owner_user).count() == 1

    def test_assign_admin_rejected(self, store, admin_user):
        with pytest.raises(NotAnOwnerError):
            assign_owner(store_id=store.id, user_id=admin_user.id)

    def test_assign_unknown_user(self, store):
        import uuid
        with pytest.raises(UserNotFoundError):
            assign_owner(store_id=store.id, user_id=uuid.uuid4())

    def test_remove_assignment(self, assignment):
        remove_assignment(assignment_id=assignment.id)

        assert not StoreOwnerAssignment.objects.filter(id=assignment.id).exists()

    def test_remove_missing_assignment(self):
        import uuid
        with pytest.raises(AssignmentNotFoundError):
            remove_assignment(assignment_id=uuid.uuid4())

    def test_owner_profiles_exclude_admins(self, admin_user, owner_user, other_owner):
        profiles = list(get_owner_profiles())

        assert owner_user in profiles
        assert other_owner in profiles
        assert admin_user not in profiles
