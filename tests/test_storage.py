from datetime import date, time

from clinicdesk.storage import Collection


def make_user(storage, username='drsofia', email='Sofia@X.com'):
    return storage.insert(Collection.USERS, {
        'username': username,
        'email': email,
        'password': 'hashed',
        'name': 'Sofia',
    })


def make_patient(storage, user_id, name='Lucas Silva', status='active'):
    return storage.insert(Collection.PATIENTS, {
        'name': name,
        'email': 'lucas@x.com',
        'phone': '11999990000',
        'status': status,
        'user_id': user_id,
    })


def test_ids_start_at_one_per_collection(storage):
    user = make_user(storage)
    first = make_patient(storage, user.id)
    second = make_patient(storage, user.id, name='Ana')

    assert user.id == 1
    assert (first.id, second.id) == (1, 2)


def test_insert_applies_record_defaults(storage):
    user = make_user(storage)
    assert user.role == 'practitioner'
    assert user.password == 'hashed'

    patient = storage.insert(Collection.PATIENTS, {
        'name': 'Ana', 'email': 'ana@x.com', 'phone': '1', 'user_id': user.id,
    })
    assert patient.status == 'active'
    assert patient.birth_date is None


def test_get_missing_returns_none(storage):
    assert storage.get(Collection.PATIENTS, 42) is None
    assert storage.get_user(42) is None


def test_update_missing_returns_none(storage):
    assert storage.update(Collection.PATIENTS, 42, {'status': 'inactive'}) is None


def test_update_is_a_shallow_merge(storage):
    user = make_user(storage)
    patient = make_patient(storage, user.id)

    updated = storage.update(Collection.PATIENTS, patient.id, {'status': 'inactive'})

    assert updated.status == 'inactive'
    assert updated.name == patient.name
    assert updated.phone == patient.phone
    assert storage.get(Collection.PATIENTS, patient.id) == updated


def test_returned_records_are_copies(storage):
    user = make_user(storage)
    patient = make_patient(storage, user.id)
    patient.name = 'changed outside the store'

    assert storage.get(Collection.PATIENTS, patient.id).name == 'Lucas Silva'


def test_list_where_filters_in_insertion_order(storage):
    sofia = make_user(storage)
    other = make_user(storage, username='drquentin', email='q@y.com')
    make_patient(storage, sofia.id, name='Ana')
    make_patient(storage, other.id, name='Bruno')
    make_patient(storage, sofia.id, name='Carla', status='inactive')

    names = [p.name for p in storage.list_where(Collection.PATIENTS, user_id=sofia.id)]
    assert names == ['Ana', 'Carla']

    inactive = storage.list_where(Collection.PATIENTS, user_id=sofia.id, status='inactive')
    assert [p.name for p in inactive] == ['Carla']
    assert len(storage.list_where(Collection.PATIENTS)) == 3


def test_list_where_matches_dates(storage):
    user = make_user(storage)
    patient = make_patient(storage, user.id)
    for day in (date(2024, 1, 10), date(2024, 1, 11)):
        storage.insert(Collection.APPOINTMENTS, {
            'patient_id': patient.id,
            'user_id': user.id,
            'date': day,
            'start_time': time(9, 0),
            'end_time': time(10, 0),
            'type': 'initial',
        })

    found = storage.list_where(Collection.APPOINTMENTS, user_id=user.id, date=date(2024, 1, 10))
    assert [a.date for a in found] == [date(2024, 1, 10)]


def test_user_lookups_ignore_case(storage):
    user = make_user(storage)

    assert storage.find_user_by_username('DrSofia').id == user.id
    assert storage.find_user_by_email('sofia@x.COM').id == user.id
    assert storage.find_user_by_email('nobody@x.com') is None


def test_ids_beyond_64_bits_are_missing(storage):
    make_user(storage)

    assert storage.get(Collection.USERS, 2 ** 64) is None
    assert storage.update(Collection.USERS, 2 ** 64, {'name': 'Ninguém'}) is None
