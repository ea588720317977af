import uuid

from conftest import bearer


def test_list_is_empty_initially(client) -> None:
    response = client.get('/api/projects')

    assert response.status_code == 200
    assert response.json() == []


def test_create_returns_full_project(api) -> None:
    user, token = api.signup('A', 'a@x.com')

    response = api.create_project(token, title='T', description='D', metadata={'k': [1, 2]})

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {'id', 'title', 'description', 'metadata', 'ownerId', 'createdAt', 'updatedAt'}
    assert body['title'] == 'T'
    assert body['description'] == 'D'
    assert body['metadata'] == {'k': [1, 2]}
    assert body['ownerId'] == user['id']


def test_create_defaults_metadata_to_empty_document(api) -> None:
    _, token = api.signup('A', 'a@x.com')

    body = api.create_project(token, title='T').json()

    assert body['metadata'] == {}
    assert body['description'] is None


def test_create_without_title_is_bad_request(api) -> None:
    _, token = api.signup('A', 'a@x.com')

    response = api.create_project(token, description='no title')

    assert response.status_code == 400
    assert response.json() == {'message': 'Missing fields: title'}


def test_create_ignores_client_supplied_owner(api) -> None:
    alice, alice_token = api.signup('Alice', 'alice@x.com')
    bob, _ = api.signup('Bob', 'bob@x.com')

    body = api.create_project(alice_token, title='T', ownerId=bob['id']).json()

    assert body['ownerId'] == alice['id']


def test_list_returns_summaries_only(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T', description='D', metadata={'x': 1}).json()

    response = api.client.get('/api/projects')

    assert response.status_code == 200
    assert response.json() == [{'id': created['id'], 'title': 'T', 'description': 'D'}]


def test_get_project(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T').json()

    response = api.client.get(f"/api/projects/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_project_is_not_found(client) -> None:
    response = client.get(f'/api/projects/{uuid.uuid4()}')

    assert response.status_code == 404
    assert response.json() == {'message': 'Not found'}


def test_get_with_malformed_id_is_not_found(client) -> None:
    response = client.get('/api/projects/not-a-uuid')

    assert response.status_code == 404


def test_update_is_a_partial_merge(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T', description='old', metadata={'k': 'v'}).json()

    response = api.client.put(
        f"/api/projects/{created['id']}",
        json={'description': 'x'},
        headers=bearer(token),
    )

    assert response.status_code == 200
    body = response.json()
    assert body['description'] == 'x'
    assert body['title'] == 'T'
    assert body['metadata'] == {'k': 'v'}


def test_update_with_null_keeps_stored_value(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T', description='keep').json()

    body = api.client.put(
        f"/api/projects/{created['id']}",
        json={'title': 'New', 'description': None},
        headers=bearer(token),
    ).json()

    assert body['title'] == 'New'
    assert body['description'] == 'keep'


def test_update_replaces_metadata_wholesale(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T', metadata={'a': 1, 'b': 2}).json()

    body = api.client.put(
        f"/api/projects/{created['id']}",
        json={'metadata': {'c': 3}},
        headers=bearer(token),
    ).json()

    assert body['metadata'] == {'c': 3}


def test_update_with_empty_title_is_bad_request(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T').json()

    response = api.client.put(f"/api/projects/{created['id']}", json={'title': ''}, headers=bearer(token))

    assert response.status_code == 400


def test_update_persists(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T').json()
    api.client.put(f"/api/projects/{created['id']}", json={'title': 'U'}, headers=bearer(token))

    assert api.client.get(f"/api/projects/{created['id']}").json()['title'] == 'U'


def test_update_requires_authentication(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T').json()

    response = api.client.put(f"/api/projects/{created['id']}", json={'title': 'U'})

    assert response.status_code == 401


def test_update_unknown_project_is_not_found(api) -> None:
    _, token = api.signup('A', 'a@x.com')

    response = api.client.put(f'/api/projects/{uuid.uuid4()}', json={'title': 'U'}, headers=bearer(token))

    assert response.status_code == 404


def test_non_owner_cannot_update_or_delete(api) -> None:
    _, alice_token = api.signup('Alice', 'alice@x.com')
    _, bob_token = api.signup('Bob', 'bob@x.com')
    created = api.create_project(alice_token, title='T').json()
    url = f"/api/projects/{created['id']}"

    update = api.client.put(url, json={'title': 'hijacked'}, headers=bearer(bob_token))
    delete = api.client.delete(url, headers=bearer(bob_token))

    assert update.status_code == 403
    assert update.json() == {'message': 'Forbidden'}
    assert delete.status_code == 403
    assert api.client.get(url).json()['title'] == 'T'


def test_admin_can_update_and_delete_any_project(api, admin_token) -> None:
    alice, alice_token = api.signup('Alice', 'alice@x.com')
    created = api.create_project(alice_token, title='T').json()
    url = f"/api/projects/{created['id']}"

    update = api.client.put(url, json={'title': 'moderated'}, headers=bearer(admin_token))
    assert update.status_code == 200
    assert update.json()['title'] == 'moderated'
    assert update.json()['ownerId'] == alice['id']

    delete = api.client.delete(url, headers=bearer(admin_token))
    assert delete.status_code == 200
    assert delete.json() == {'message': 'Deleted'}


def test_delete_unknown_project_is_not_found(api) -> None:
    _, token = api.signup('A', 'a@x.com')

    response = api.client.delete(f'/api/projects/{uuid.uuid4()}', headers=bearer(token))

    assert response.status_code == 404


def test_end_to_end_scenario(api) -> None:
    register = api.register('A', 'a@x.com', 'p')
    assert register.status_code == 201
    user_id = register.json()['id']

    login = api.client.post('/api/auth/login', json={'email': 'a@x.com', 'password': 'p'})
    assert login.status_code == 200
    token = login.json()['token']

    created = api.create_project(token, title='T')
    assert created.status_code == 201
    assert created.json()['ownerId'] == user_id
    url = f"/api/projects/{created.json()['id']}"

    fetched = api.client.get(url)
    assert fetched.status_code == 200
    assert fetched.json()['title'] == 'T'

    _, other_token = api.signup('B', 'b@x.com')
    assert api.client.delete(url, headers=bearer(other_token)).status_code == 403

    deleted = api.client.delete(url, headers=bearer(token))
    assert deleted.status_code == 200
    assert deleted.json() == {'message': 'Deleted'}

    assert api.client.get(url).status_code == 404


def test_update_without_body_leaves_project_unchanged(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T', description='D', metadata={'k': 'v'}).json()

    response = api.client.put(f"/api/projects/{created['id']}", headers=bearer(token))

    assert response.status_code == 200
    body = response.json()
    assert body['title'] == 'T'
    assert body['description'] == 'D'
    assert body['metadata'] == {'k': 'v'}


def test_update_with_empty_object_leaves_project_unchanged(api) -> None:
    _, token = api.signup('A', 'a@x.com')
    created = api.create_project(token, title='T').json()

    response = api.client.put(f"/api/projects/{created['id']}", json={}, headers=bearer(token))

    assert response.status_code == 200
    assert response.json()['title'] == 'T'
