import unittest

from datadigest.readers import frame_name, read_table


class TestReadTable(unittest.TestCase):
    def test_csv_bytes_keep_codes_as_text(self) -> None:
        df = read_table(b"area_fips,own_code\n06075,5\n", "qcew.csv")
        self.assertEqual(df.iloc[0]["area_fips"], "06075")

    def test_unsupported_suffix(self) -> None:
        with self.assertRaises(ValueError):
            read_table(b"PK", "book.xlsx")

    def test_frame_name(self) -> None:
        self.assertEqual(frame_name("data_raw/qcew/2022.annual.csv"), "2022.annual")


if __name__ == "__main__":
    unittest.main()
