from number_pair.game import Board, MatchRules, find_all_matches, find_any_match, has_any_match


class TestFindAnyMatch:
    def test_stuck_board(self):
        board = Board.from_list([
            [1, 2, 1],
            [2, 1, 2],
            [1, 2, 1],
        ])
        assert find_any_match(board, MatchRules()) is None
        assert not has_any_match(board, MatchRules())

    def test_empty_board_has_no_match(self):
        assert find_any_match(Board(3), MatchRules()) is None

    def test_row_major_first(self):
        board = Board.from_list([
            [1, 2, 1],
            [2, 1, 2],
            [4, 6, 3],
        ])
        assert find_any_match(board, MatchRules()) == ((2, 0), (2, 1))

    def test_first_cell_in_row_major_order_wins(self):
        board = Board.from_list([
            [1, 3, 1],
            [2, 7, 3],
            [1, 2, 1],
        ])
        assert find_any_match(board, MatchRules()) == ((0, 1), (1, 1))

    def test_down_is_scanned_before_right(self):
        board = Board.from_list([
            [5, 5],
            [5, 1],
        ])
        assert find_any_match(board, MatchRules()) == ((0, 0), (1, 0))

    def test_later_rows_found_after_clearing(self):
        board = Board.from_list([
            [0, 4, 0],
            [1, 6, 2],
            [0, 4, 0],
        ])
        assert find_any_match(board, MatchRules()) == ((0, 1), (1, 1))
        board.set(0, 1, 0)
        assert find_any_match(board, MatchRules()) == ((1, 1), (2, 1))

    def test_empty_cells_break_adjacency(self):
        board = Board.from_list([
            [3, 0, 7],
            [0, 0, 0],
            [0, 0, 0],
        ])
        assert not has_any_match(board, MatchRules())

    def test_respects_rules(self):
        board = Board.from_list([
            [4, 4],
            [1, 2],
        ])
        assert find_any_match(board, MatchRules(sum_enabled=True, equal_enabled=False)) is None
        assert find_any_match(board, MatchRules(sum_enabled=False, equal_enabled=True)) == ((0, 0), (0, 1))
        assert find_any_match(board, MatchRules(False, False)) is None


class TestFindAllMatches:
    def test_lists_each_pair_once(self):
        board = Board.from_list([
            [5, 5],
            [5, 1],
        ])
        assert find_all_matches(board, MatchRules()) == [((0, 0), (0, 1)), ((0, 0), (1, 0))]

    def test_first_of_all_agrees_with_any(self):
        board = Board.from_list([
            [1, 2, 3],
            [9, 8, 7],
            [6, 6, 6],
        ])
        rules = MatchRules()
        assert tuple(sorted(find_any_match(board, rules))) in find_all_matches(board, rules)
