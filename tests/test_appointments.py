from conftest import create_appointment, create_patient


def test_create_stamps_owner_and_serializes_clock_times(sofia):
    me = sofia.get('/api/user').get_json()
    patient = create_patient(sofia)

    appointment = create_appointment(sofia, patient['id'], userId=12345, notes='Primeira consulta')

    assert appointment['userId'] == me['id']
    assert appointment['patientId'] == patient['id']
    assert appointment['startTime'] == '09:00'
    assert appointment['endTime'] == '10:00'
    assert appointment['status'] == 'confirmed'
    assert appointment['notes'] == 'Primeira consulta'


def test_create_for_foreign_patient_is_403_and_stores_nothing(sofia, quentin):
    patient = create_patient(quentin)

    response = sofia.post('/api/appointments', json={
        'patientId': patient['id'],
        'date': '2024-01-10',
        'startTime': '09:00',
        'endTime': '10:00',
        'type': 'initial',
    })

    assert response.status_code == 403
    assert sofia.get('/api/appointments').get_json() == []
    assert quentin.get('/api/appointments').get_json() == []


def test_create_for_missing_patient_is_403(sofia):
    response = sofia.post('/api/appointments', json={
        'patientId': 999,
        'date': '2024-01-10',
        'startTime': '09:00',
        'endTime': '10:00',
        'type': 'initial',
    })

    assert response.status_code == 403


def test_create_requires_end_after_start(sofia):
    patient = create_patient(sofia)

    response = sofia.post('/api/appointments', json={
        'patientId': patient['id'],
        'date': '2024-01-10',
        'startTime': '10:00',
        'endTime': '09:30',
        'type': 'initial',
    })

    assert response.status_code == 400
    assert response.get_json()['errors'][0]['field'] == 'endTime'


def test_create_rejects_bad_status_and_date(sofia):
    patient = create_patient(sofia)

    response = sofia.post('/api/appointments', json={
        'patientId': patient['id'],
        'date': '10/01/2024',
        'startTime': '09:00',
        'endTime': '10:00',
        'type': 'initial',
        'status': 'done',
    })

    assert response.status_code == 400
    assert {e['field'] for e in response.get_json()['errors']} == {'date', 'status'}


def test_list_for_date_is_scoped_and_ordered(sofia, quentin):
    patient = create_patient(sofia)
    create_appointment(sofia, patient['id'], startTime='14:00', endTime='15:00')
    create_appointment(sofia, patient['id'], startTime='08:00', endTime='09:00')
    create_appointment(sofia, patient['id'], date='2024-01-11')
    other_patient = create_patient(quentin)
    create_appointment(quentin, other_patient['id'])

    on_day = sofia.get('/api/appointments/date/2024-01-10').get_json()

    assert [a['startTime'] for a in on_day] == ['08:00', '14:00']
    assert all(a['date'] == '2024-01-10' for a in on_day)


def test_list_for_invalid_date_is_400(sofia):
    response = sofia.get('/api/appointments/date/not-a-date')

    assert response.status_code == 400
    assert response.get_json()['errors'][0]['field'] == 'date'


def test_list_all_for_user(sofia, quentin):
    patient = create_patient(sofia)
    create_appointment(sofia, patient['id'], date='2024-01-11')
    create_appointment(sofia, patient['id'], date='2024-01-10')

    dates = [a['date'] for a in sofia.get('/api/appointments').get_json()]

    assert dates == ['2024-01-10', '2024-01-11']
    assert quentin.get('/api/appointments').get_json() == []


def test_list_for_patient(sofia, quentin):
    ana = create_patient(sofia, name='Ana')
    bruno = create_patient(sofia, name='Bruno')
    create_appointment(sofia, ana['id'])
    create_appointment(sofia, bruno['id'])

    response = sofia.get(f"/api/appointments/patient/{ana['id']}")

    assert [a['patientId'] for a in response.get_json()] == [ana['id']]
    assert quentin.get(f"/api/appointments/patient/{ana['id']}").status_code == 403
    assert sofia.get('/api/appointments/patient/999').status_code == 404


def test_get_single_appointment(sofia, quentin):
    patient = create_patient(sofia)
    appointment = create_appointment(sofia, patient['id'])

    assert sofia.get(f"/api/appointments/{appointment['id']}").get_json() == appointment
    assert quentin.get(f"/api/appointments/{appointment['id']}").status_code == 403
    assert sofia.get('/api/appointments/999').status_code == 404


def test_update_status_keeps_other_fields(sofia):
    patient = create_patient(sofia)
    appointment = create_appointment(sofia, patient['id'])

    response = sofia.put(f"/api/appointments/{appointment['id']}", json={'status': 'canceled'})

    assert response.status_code == 200
    assert response.get_json() == {**appointment, 'status': 'canceled'}


def test_update_checks_merged_times(sofia):
    patient = create_patient(sofia)
    appointment = create_appointment(sofia, patient['id'])

    response = sofia.put(f"/api/appointments/{appointment['id']}", json={'startTime': '11:00'})

    assert response.status_code == 400
    assert response.get_json()['errors'][0]['field'] == 'endTime'

    moved = sofia.put(f"/api/appointments/{appointment['id']}", json={'startTime': '11:00', 'endTime': '12:00'})
    assert moved.status_code == 200
    assert (moved.get_json()['startTime'], moved.get_json()['endTime']) == ('11:00', '12:00')


def test_update_cannot_move_to_foreign_patient(sofia, quentin):
    patient = create_patient(sofia)
    appointment = create_appointment(sofia, patient['id'])
    foreign = create_patient(quentin)

    response = sofia.put(f"/api/appointments/{appointment['id']}", json={'patientId': foreign['id']})

    assert response.status_code == 403
    assert sofia.get(f"/api/appointments/{appointment['id']}").get_json()['patientId'] == patient['id']


def test_update_foreign_appointment_is_403(sofia, quentin):
    patient = create_patient(quentin)
    appointment = create_appointment(quentin, patient['id'])

    response = sofia.put(f"/api/appointments/{appointment['id']}", json={'status': 'canceled'})

    assert response.status_code == 403
    assert quentin.get(f"/api/appointments/{appointment['id']}").get_json()['status'] == 'confirmed'


def test_list_for_loose_date_is_400(sofia):
    for day in ('2024-1-5', '20240105', '2024-02-30'):
        response = sofia.get(f'/api/appointments/date/{day}')

        assert response.status_code == 400, day
        assert response.get_json()['errors'][0]['field'] == 'date'


def test_times_with_utc_offset_are_rejected(sofia):
    patient = create_patient(sofia)
    appointment = create_appointment(sofia, patient['id'])

    response = sofia.post('/api/appointments', json={
        'patientId': patient['id'],
        'date': '2024-01-10',
        'startTime': '10:00+03:00',
        'endTime': '11:00',
        'type': 'initial',
    })
    assert response.status_code == 400
    assert response.get_json()['errors'][0]['field'] == 'startTime'

    patched = sofia.put(f"/api/appointments/{appointment['id']}", json={'startTime': '08:00Z'})
    assert patched.status_code == 400
    assert patched.get_json()['errors'][0]['field'] == 'startTime'

    listed = sofia.get('/api/appointments')
    assert listed.status_code == 200
    assert listed.get_json() == [appointment]


def test_times_are_kept_to_the_minute(sofia):
    patient = create_patient(sofia)

    appointment = create_appointment(sofia, patient['id'], startTime='09:15:30', endTime='10:00:00')
    assert (appointment['startTime'], appointment['endTime']) == ('09:15', '10:00')

    response = sofia.post('/api/appointments', json={
        'patientId': patient['id'],
        'date': '2024-01-10',
        'startTime': '09:00:10',
        'endTime': '09:00:50',
        'type': 'initial',
    })
    assert response.status_code == 400
    assert response.get_json()['errors'][0]['field'] == 'endTime'


def test_out_of_range_ids(sofia):
    huge = 2 ** 64

    assert sofia.get(f'/api/appointments/{huge}').status_code == 404
    assert sofia.put(f'/api/appointments/{huge}', json={'status': 'canceled'}).status_code == 404
    assert sofia.get(f'/api/patients/{huge}').status_code == 404

    response = sofia.post('/api/appointments', json={
        'patientId': huge,
        'date': '2024-01-10',
        'startTime': '09:00',
        'endTime': '10:00',
        'type': 'initial',
    })
    assert response.status_code == 400
    assert response.get_json()['errors'][0]['field'] == 'patientId'
    assert sofia.get('/api/appointments').get_json() == []
