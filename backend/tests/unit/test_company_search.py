"""
Search and pagination against a real database.
"""

from corphub.database.repositories import CompanyProfileRepository
from corphub.database.search import CompanySearchQuery

from .db_support import DatabaseTestCase


class TestCompanySearch(DatabaseTestCase):

    async def _search(self, filters=None, pagination=None):
        query = CompanySearchQuery.build(filters, pagination)
        result = await CompanyProfileRepository.search(self.session_factory, query)
        return result, query.pagination_meta(result.total)

    async def test_pagination_over_25_rows(self):
        await self.seed_profiles(25)

        result, meta = await self._search(pagination={"page": 1, "limit": 10})
        self.assertEqual(len(result.rows), 10)
        self.assertEqual(result.total, 25)
        self.assertTrue(meta["has_next_page"])
        self.assertFalse(meta["has_prev_page"])

        result, meta = await self._search(pagination={"page": 3, "limit": 10})
        self.assertEqual(len(result.rows), 5)
        self.assertFalse(meta["has_next_page"])
        self.assertTrue(meta["has_prev_page"])

        result, meta = await self._search(pagination={"page": 4, "limit": 10})
        self.assertEqual(result.rows, [])
        self.assertEqual(result.total, 25)

    async def test_default_order_is_newest_first(self):
        await self.seed_profiles(3)
        result, _ = await self._search()
        self.assertEqual([p.company_name for p in result.rows], ["Company 03", "Company 02", "Company 01"])

    async def test_pages_do_not_overlap_when_sort_keys_tie(self):
        # Same city for all rows; id breaks the tie
        await self.seed_profiles(12, city="Pune")
        seen = []
        for page in (1, 2, 3):
            result, _ = await self._search(pagination={"page": page, "limit": 5, "sort_by": "city"})
            seen.extend(p.id for p in result.rows)
        self.assertEqual(len(seen), 12)
        self.assertEqual(len(set(seen)), 12)

    async def test_filter_composition(self):
        owners = [await self.create_user() for _ in range(4)]
        await self.insert_profile(owners[0], company_name="A", industry="FinTech", city="Pune")
        await self.insert_profile(owners[1], company_name="B", industry="Technology", city="pune camp")
        await self.insert_profile(owners[2], company_name="C", industry="Technology", city="Mumbai")
        await self.insert_profile(owners[3], company_name="D", industry="Retail", city="Pune")

        result, _ = await self._search({"industry": "tech", "city": "Pune"})
        self.assertEqual(sorted(p.company_name for p in result.rows), ["A", "B"])
        self.assertEqual(result.total, 2)

    async def test_search_matches_name_or_description(self):
        owners = [await self.create_user() for _ in range(3)]
        await self.insert_profile(owners[0], company_name="Solar Works", description="Panels")
        await self.insert_profile(owners[1], company_name="Bright Homes", description="We install SOLAR roofs")
        await self.insert_profile(owners[2], company_name="Other", description="Nothing here")

        result, _ = await self._search({"search": "solar"})
        self.assertEqual(sorted(p.company_name for p in result.rows), ["Bright Homes", "Solar Works"])

    async def test_wildcards_in_input_match_literally(self):
        owners = [await self.create_user() for _ in range(2)]
        await self.insert_profile(owners[0], company_name="Hundred Percent", description="100% organic")
        await self.insert_profile(owners[1], company_name="Plain", description="1000 organic")

        result, _ = await self._search({"search": "100%"})
        self.assertEqual([p.company_name for p in result.rows], ["Hundred Percent"])

    async def test_invalid_sort_field_falls_back(self):
        await self.seed_profiles(2)
        result, _ = await self._search(pagination={"sort_by": "password"})
        self.assertEqual(result.rows[0].company_name, "Company 02")

    async def test_rows_carry_owner_fields(self):
        owner = await self.create_user(full_name="Ravi Kumar")
        await self.insert_profile(owner)
        result, _ = await self._search()
        self.assertEqual(result.rows[0].owner_name, "Ravi Kumar")
