from calculator import (BBFSCalculator, dim_length, export_all, export_chunk, export_chunks,
                        generate_for_input)
from result_filters import FilterConfig


def test_dim_length():
    assert [dim_length(d) for d in ("2D", "3D", "4D", "5D")] == [2, 3, 4, 5]


def test_generate_bbfs_buckets():
    data = BBFSCalculator().generate_bbfs("11222")
    assert data["2D"]["single"] == ["12", "21"]
    assert data["2D"]["twin"] == ["11", "22"]
    assert data["3D"]["twin"] == ["112", "121", "122", "211", "212", "221"]
    assert data["3D"]["twin_plus"] == ["222"]
    assert data["5D"]["twin_plus"] == ["11222", "12122", "12212", "12221", "21122",
                                       "21212", "21221", "22112", "22121", "22211"]


def test_generate_bbfs_needs_two_digits():
    data = BBFSCalculator().generate_bbfs("7")
    assert all(not nums for buckets in data.values() for nums in buckets.values())


def test_generate_for_input_is_memoized_on_clean_digits():
    a = generate_for_input("1-1-2", 2)
    b = generate_for_input("112", 2)
    assert a == b == (["12", "21"], ["11"])
    a[0].append("xx")
    assert generate_for_input("112", 2)[0] == ["12", "21"]


def test_generate_poltar_classifies():
    data = BBFSCalculator().generate_poltar(["", "", "1", "12", "1"])
    assert data["3D"]["twin_plus"] == ["111"]
    assert data["3D"]["twin"] == ["121"]
    assert data["2D"]["single"] == ["21"]
    assert data["2D"]["twin"] == ["11"]
    assert data["4D"] == {"single": [], "twin": [], "twin_plus": []}


def test_filter_and_result_list_order():
    calc = BBFSCalculator()
    data = calc.generate_bbfs("1123")
    filtered = calc.filter_results(data, FilterConfig(show_single=False))
    combined = calc.result_list(filtered, ["3D", "2D"])
    assert combined[0] == "11"
    assert all(len(s) in (2, 3) for s in combined)
    assert combined.index("11") < combined.index("112")


def test_summary_zeroes_unselected_dimensions():
    calc = BBFSCalculator()
    data = calc.generate_bbfs("1234")
    summary = calc.summary(data, ["2D"]).set_index("type")
    assert summary.loc["2D", "single"] == 12
    assert summary.loc["2D", "total"] == 12
    assert summary.loc["3D", "total"] == 0


def test_export_chunk_walks_cursor():
    results = [str(i) for i in range(5)]
    text, end = export_chunk(results, 0, 2)
    assert (text, end) == ("0*1", 2)
    text, end = export_chunk(results, end, 2)
    assert (text, end) == ("2*3", 4)
    text, end = export_chunk(results, end, 2)
    assert (text, end) == ("4", 5)
    assert export_chunk(results, end, 2) == ("", 5)
    assert export_chunk([], 3) == ("", 3)


def test_export_all_and_chunks():
    results = ["12", "21", "11"]
    assert export_all(results) == "12*21*11"
    assert export_chunks(results, 2) == ["12*21", "11"]
