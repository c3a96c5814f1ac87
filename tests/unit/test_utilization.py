"""Unit tests for pool utilization and lease statistics."""

import pytest
from factories import NOW, make_assignment, make_host, make_lease
from kea_mcp.analysis.utilization import (
    build_inventory_index,
    classify_headroom,
    compute_assignment_statistics,
    compute_lease_statistics,
    compute_utilization,
    enrich_reservations,
    filter_records,
    format_expiration,
)
from kea_mcp.models import Lease, PoolConfig, Reservation


def _pool(total: int) -> PoolConfig:
    return PoolConfig(start_ip='192.168.1.2', end_ip='192.168.1.100', total=total)


def _reservations(count: int) -> list[Reservation]:
    return [Reservation.model_validate(make_host(f'192.168.1.{i + 2}')) for i in range(count)]


class TestClassifyHeadroom:
    """Test the three-level headroom classification."""

    @pytest.mark.parametrize(
        'available, total, expected',
        [
            (14, 99, 'Low'),
            (19, 100, 'Low'),
            (20, 100, 'Moderate'),
            (59, 100, 'Moderate'),
            (60, 100, 'Good'),
            (100, 100, 'Good'),
            (0, 0, 'Low'),
            (-5, 99, 'Low'),
        ],
    )
    def test_thresholds(self, available, total, expected):
        assert classify_headroom(available, total) == expected


class TestComputeUtilization:
    """Test the reconciler's capacity reduction."""

    def test_low_headroom(self):
        result = compute_utilization(_pool(99), _reservations(85), [])
        assert result.used_count == 85
        assert result.available_count == 14
        assert result.status == 'Low'

    def test_counts_both_inventories(self, sample_reservations, sample_assignments):
        result = compute_utilization(_pool(99), sample_reservations, sample_assignments)
        assert result.reserved_count == 2
        assert result.static_count == 2
        assert result.used_count == 4
        assert result.available_count == 95
        assert result.status == 'Good'
        assert result.pool_range == '192.168.1.2 - 192.168.1.100'

    def test_overcommitted_pool_is_reported_not_clamped(self):
        result = compute_utilization(_pool(10), _reservations(12), [])
        assert result.available_count == -2
        assert result.status == 'Low'

    def test_empty_pool(self):
        result = compute_utilization(_pool(0), [], [])
        assert result.available_count == 0
        assert result.status == 'Low'


class TestLeaseStatistics:
    def test_counts_active_leases_in_subnet(self):
        leases = [
            Lease.model_validate(make_lease('192.168.1.150')),
            Lease.model_validate(make_lease('192.168.1.151')),
            Lease.model_validate(make_lease('192.168.1.152', state=2)),
            Lease.model_validate(make_lease('10.0.0.5', **{'subnet-id': 2})),
        ]
        stats = compute_lease_statistics(leases, scope_total=200, subnet_id=1)
        assert stats.active == 2
        assert stats.available == 198
        assert stats.status == 'Good'

    def test_full_scope(self):
        leases = [Lease.model_validate(make_lease(f'192.168.1.{i}')) for i in range(1, 11)]
        assert compute_lease_statistics(leases, scope_total=10, subnet_id=1).status == 'Low'


class TestAssignmentStatistics:
    def test_field_coverage(self, sample_assignments):
        stats = compute_assignment_statistics(sample_assignments)
        assert stats.total == 2
        assert stats.with_mac == 1
        assert stats.with_hostname == 1
        assert stats.with_description == 0


class TestFormatExpiration:
    """Test the remaining-lease-time formatting."""

    def _lease(self, lifetime: int) -> Lease:
        return Lease.model_validate(make_lease('10.0.0.1', cltt=NOW, **{'valid-lft': lifetime}))

    @pytest.mark.parametrize(
        'lifetime, expected',
        [
            (5 * 86400 + 3 * 3600, '5d 3h'),
            (2 * 86400, '2d'),
            (2 * 3600 + 30 * 60, '2h 30m'),
            (3600, '1h'),
            (45 * 60 + 30, '45m'),
            (0, 'Expired'),
        ],
    )
    def test_formats(self, lifetime, expected):
        assert format_expiration(self._lease(lifetime), now=NOW) == expected

    def test_no_lease(self):
        assert format_expiration(None, now=NOW) == 'No Data'

    def test_unknown_expiry(self):
        assert format_expiration(Lease(ip_address='10.0.0.1'), now=NOW) == 'Unknown'


class TestEnrichReservations:
    def test_marks_reservations_with_active_lease(self, sample_reservations):
        leases = [
            Lease.model_validate(make_lease('192.168.1.20', cltt=NOW, **{'valid-lft': 3600})),
            Lease.model_validate(make_lease('192.168.1.21', state=2)),
        ]
        enriched = enrich_reservations(sample_reservations, leases, now=NOW)

        assert enriched[0].is_active
        assert enriched[0].lease.ip_address == '192.168.1.20'
        assert enriched[0].expires_in == '1h'
        assert not enriched[1].is_active
        assert enriched[1].lease is None
        assert enriched[1].expires_in is None


class TestSearch:
    """Test the cross-inventory search."""

    @pytest.fixture
    def index(self, sample_leases, sample_reservations, sample_assignments):
        return build_inventory_index(sample_leases, sample_reservations, sample_assignments)

    def test_index_tags_sources(self, index):
        assert [record.source for record in index].count('lease') == 2
        assert [record.source for record in index].count('reservation') == 2
        assert [record.source for record in index].count('static') == 2

    def test_match_by_hostname_case_insensitive(self, index):
        matches = filter_records(index, 'PRINTER')
        assert [(m.source, m.ip_address) for m in matches] == [('reservation', '192.168.1.20')]

    def test_match_by_mac_with_dashes(self, index):
        matches = filter_records(index, 'AA-BB-CC-00-00-05')
        assert [m.ip_address for m in matches] == ['192.168.1.5']

    def test_match_by_ip_fragment(self, index):
        assert {m.ip_address for m in filter_records(index, '192.168.1.15')} == {
            '192.168.1.150',
            '192.168.1.151',
        }

    def test_blank_term_returns_everything(self, index):
        assert len(filter_records(index, '  ')) == len(index)
