from sqlmodel import Session

from conftest import register
from visaconnect.db.session import engine
from visaconnect.models.job import Job


def _file_report(client, headers, target_type, target_id, reason='Spam content here'):
    response = client.post(
        '/api/reports',
        json={'target_type': target_type, 'target_id': target_id, 'reason': reason},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


def test_admin_endpoints_require_admin_role(client, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    paths = [
        ('get', '/api/admin/reports'),
        ('get', '/api/admin/reports/stats'),
        ('get', f"/api/admin/reports/{report['report_id']}"),
        ('get', f"/api/admin/reports/{report['report_id']}/target"),
        ('post', f"/api/admin/reports/{report['report_id']}/resolve"),
        ('post', f"/api/admin/reports/{report['report_id']}/remove"),
    ]
    for method, path in paths:
        response = getattr(client, method)(path, headers=user['headers'])
        assert response.status_code == 403, path
        assert response.json()['message'] == 'Admin only'
        assert getattr(client, method)(path).status_code == 401


def test_list_filters_search_and_paginate(client, admin, user, job, meetup):
    other = register(client)
    first = _file_report(client, user['headers'], 'job', job['id'], reason='Fake employer asking for fees')
    _file_report(client, other['headers'], 'job', job['id'])
    _file_report(client, user['headers'], 'meetup', meetup['id'], reason='Meetup location is wrong')

    everything = client.get('/api/admin/reports', headers=admin['headers']).json()
    assert everything['total'] == 3
    assert len(everything['data']) == 3

    meetups = client.get('/api/admin/reports?target_type=meetup', headers=admin['headers']).json()
    assert meetups['total'] == 1
    assert meetups['data'][0]['target_type'] == 'meetup'

    by_reporter = client.get(f"/api/admin/reports?reporter_id={user['id']}", headers=admin['headers']).json()
    assert by_reporter['total'] == 2

    searched = client.get('/api/admin/reports?search=FEES', headers=admin['headers']).json()
    assert [item['report_id'] for item in searched['data']] == [first['report_id']]

    by_id = client.get(f"/api/admin/reports?search={first['report_id'][:8]}", headers=admin['headers']).json()
    assert by_id['data'][0]['report_id'] == first['report_id']

    page = client.get('/api/admin/reports?limit=2&offset=2', headers=admin['headers']).json()
    assert page['total'] == 3
    assert len(page['data']) == 1

    oldest_first = client.get('/api/admin/reports?sort_order=asc', headers=admin['headers']).json()
    assert oldest_first['data'][0]['report_id'] == first['report_id']


def test_list_rejects_bad_query_values(client, admin):
    assert client.get('/api/admin/reports?status=closed', headers=admin['headers']).status_code == 422
    assert client.get('/api/admin/reports?limit=0', headers=admin['headers']).status_code == 422
    assert client.get('/api/admin/reports?sort_by=reason', headers=admin['headers']).status_code == 422


def test_stats_count_reports_by_status(client, admin, user, job, meetup):
    resolved = _file_report(client, user['headers'], 'job', job['id'])
    _file_report(client, user['headers'], 'meetup', meetup['id'])
    client.post(f"/api/admin/reports/{resolved['report_id']}/resolve", json={}, headers=admin['headers'])

    stats = client.get('/api/admin/reports/stats', headers=admin['headers']).json()
    assert stats == {
        'total_reports': 2,
        'pending_reports': 1,
        'resolved_reports': 1,
        'removed_reports': 0,
        'reports_this_week': 2,
        'reports_this_month': 2,
    }


def test_get_single_report(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    response = client.get(f"/api/admin/reports/{report['report_id']}", headers=admin['headers'])
    assert response.status_code == 200
    assert response.json() == report

    missing = client.get('/api/admin/reports/unknown', headers=admin['headers'])
    assert missing.status_code == 404
    assert missing.json()['message'] == 'Report not found'


def test_resolve_records_notes_and_keeps_content(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    response = client.post(
        f"/api/admin/reports/{report['report_id']}/resolve",
        json={'notes': 'No violation found'},
        headers=admin['headers'],
    )
    assert response.status_code == 200
    body = response.json()
    assert body['report']['status'] == 'resolved'
    assert body['report']['admin_notes'] == 'No violation found'
    assert body['report']['moderated_by'] == admin['id']
    assert body['report']['version'] == 2
    assert body['content_hidden'] is False
    assert body['content_error'] is None
    assert client.get(f"/api/jobs/{job['id']}").status_code == 200


def test_resolve_without_body(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    response = client.post(f"/api/admin/reports/{report['report_id']}/resolve", headers=admin['headers'])
    assert response.status_code == 200
    assert response.json()['report']['admin_notes'] is None


def test_remove_hides_reported_job(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    response = client.post(
        f"/api/admin/reports/{report['report_id']}/remove",
        json={'notes': 'Scam posting'},
        headers=admin['headers'],
    )
    assert response.status_code == 200
    body = response.json()
    assert body['report']['status'] == 'removed'
    assert body['content_hidden'] is True
    assert body['content_error'] is None
    assert client.get(f"/api/jobs/{job['id']}").status_code == 404


def test_remove_hides_reported_meetup(client, admin, user, meetup):
    report = _file_report(client, user['headers'], 'meetup', meetup['id'])
    client.post(f"/api/admin/reports/{report['report_id']}/remove", json={}, headers=admin['headers'])
    assert client.get(f"/api/meetups/{meetup['id']}").status_code == 404


def test_remove_twice_conflicts_and_stays_removed(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    path = f"/api/admin/reports/{report['report_id']}/remove"
    first = client.post(path, json={}, headers=admin['headers'])
    assert first.status_code == 200

    second = client.post(path, json={}, headers=admin['headers'])
    assert second.status_code == 409
    assert second.json()['message'] == 'Report is already removed'

    current = client.get(f"/api/admin/reports/{report['report_id']}", headers=admin['headers']).json()
    assert current['status'] == 'removed'


def test_resolve_after_terminal_state_leaves_report_untouched(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    removed = client.post(
        f"/api/admin/reports/{report['report_id']}/remove", json={}, headers=admin['headers']
    ).json()['report']

    rejected = client.post(
        f"/api/admin/reports/{report['report_id']}/resolve",
        json={'notes': 'changed my mind'},
        headers=admin['headers'],
    )
    assert rejected.status_code == 409

    current = client.get(f"/api/admin/reports/{report['report_id']}", headers=admin['headers']).json()
    assert current['status'] == 'removed'
    assert current['updated_at'] == removed['updated_at']
    assert current['admin_notes'] is None
    assert current['version'] == removed['version']


def test_transition_back_to_pending_is_rejected(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    path = f"/api/admin/reports/{report['report_id']}"

    pending = client.patch(path, json={'status': 'pending'}, headers=admin['headers'])
    assert pending.status_code == 409
    assert pending.json()['message'] == 'Reports cannot be moved back to pending'

    resolved = client.patch(path, json={'status': 'resolved'}, headers=admin['headers'])
    assert resolved.status_code == 200

    reopened = client.patch(path, json={'status': 'pending'}, headers=admin['headers'])
    assert reopened.status_code == 409
    assert client.get(path, headers=admin['headers']).json()['status'] == 'resolved'


def test_stale_version_is_rejected(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    response = client.post(
        f"/api/admin/reports/{report['report_id']}/resolve",
        json={'expected_version': 7},
        headers=admin['headers'],
    )
    assert response.status_code == 409
    assert 'another moderator' in response.json()['message']

    current = client.post(
        f"/api/admin/reports/{report['report_id']}/resolve",
        json={'expected_version': report['version']},
        headers=admin['headers'],
    )
    assert current.status_code == 200


def test_moderating_unknown_report_returns_404(client, admin):
    response = client.post('/api/admin/reports/missing/resolve', json={}, headers=admin['headers'])
    assert response.status_code == 404


def test_remove_succeeds_when_target_is_gone(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    with Session(engine) as session:
        session.delete(session.get(Job, job['id']))
        session.commit()

    response = client.post(
        f"/api/admin/reports/{report['report_id']}/remove", json={}, headers=admin['headers']
    )
    assert response.status_code == 200
    body = response.json()
    assert body['report']['status'] == 'removed'
    assert body['content_hidden'] is False
    assert 'no longer exists' in body['content_error']


def test_target_details_for_job(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    response = client.get(f"/api/admin/reports/{report['report_id']}/target", headers=admin['headers'])
    assert response.status_code == 200
    body = response.json()
    assert body['target_type'] == 'job'
    assert body['job']['id'] == job['id']
    assert body['meetup'] is None
    assert body['poster']['id'] == job['posted_by']
    assert body['poster']['first_name'] == 'Poster'


def test_target_details_still_available_after_removal(client, admin, user, meetup):
    report = _file_report(client, user['headers'], 'meetup', meetup['id'])
    client.post(f"/api/admin/reports/{report['report_id']}/remove", json={}, headers=admin['headers'])

    body = client.get(f"/api/admin/reports/{report['report_id']}/target", headers=admin['headers']).json()
    assert body['meetup']['id'] == meetup['id']
    assert body['meetup']['is_active'] is False


def test_target_details_missing_target(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    with Session(engine) as session:
        session.delete(session.get(Job, job['id']))
        session.commit()
    response = client.get(f"/api/admin/reports/{report['report_id']}/target", headers=admin['headers'])
    assert response.status_code == 404
    assert response.json()['message'] == 'Report target not found'


def test_reporter_is_notified_of_outcome(client, admin, user, job):
    report = _file_report(client, user['headers'], 'job', job['id'])
    client.post(f"/api/admin/reports/{report['report_id']}/remove", json={}, headers=admin['headers'])

    notifications = client.get('/api/notifications', headers=user['headers']).json()
    assert len(notifications) == 1
    assert notifications[0]['type'] == 'report_moderated'
    assert 'removed' in notifications[0]['content']
