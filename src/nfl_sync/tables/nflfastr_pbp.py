"""Column table for the nflverse play-by-play feed (``nflfastr_pbp``).

One entry per column of the target table, in table order. The kinds match
the columns' database types: counters, yardages, clocks and scores are
integers; probabilities, expected points and model outputs are floats;
everything else, including the 0/1 play flags stored as text, is text.
"""

from ..coerce import ColumnKind
from ..normalize import TableSpec, columns

INTEGER = ColumnKind.INTEGER
FLOAT = ColumnKind.FLOAT
TEXT = ColumnKind.TEXT

TABLE_NAME = "nflfastr_pbp"

COLUMNS = columns(
    ("play_id", INTEGER),
    ("game_id", TEXT),
    ("old_game_id", INTEGER),
    ("home_team", TEXT),
    ("away_team", TEXT),
    ("season_type", TEXT),
    ("week", INTEGER),
    ("posteam", TEXT),
    ("posteam_type", TEXT),
    ("defteam", TEXT),
    ("side_of_field", TEXT),
    ("yardline_100", INTEGER),
    ("game_date", TEXT),
    ("quarter_seconds_remaining", INTEGER),
    ("half_seconds_remaining", INTEGER),
    ("game_seconds_remaining", INTEGER),
    ("game_half", TEXT),
    ("quarter_end", INTEGER),
    ("drive", INTEGER),
    ("sp", INTEGER),
    ("qtr", INTEGER),
    ("down", INTEGER),
    ("goal_to_go", INTEGER),
    ("time", TEXT),
    ("yrdln", TEXT),
    ("ydstogo", INTEGER),
    ("ydsnet", INTEGER),
    ("desc", TEXT),
    ("play_type", TEXT),
    ("yards_gained", INTEGER),
    ("shotgun", INTEGER),
    ("no_huddle", INTEGER),
    ("qb_dropback", INTEGER),
    ("qb_kneel", INTEGER),
    ("qb_spike", INTEGER),
    ("qb_scramble", INTEGER),
    ("pass_length", TEXT),
    ("pass_location", TEXT),
    ("air_yards", INTEGER),
    ("yards_after_catch", INTEGER),
    ("run_location", TEXT),
    ("run_gap", TEXT),
    ("field_goal_result", TEXT),
    ("kick_distance", INTEGER),
    ("extra_point_result", TEXT),
    ("two_point_conv_result", TEXT),
    ("home_timeouts_remaining", INTEGER),
    ("away_timeouts_remaining", INTEGER),
    ("timeout", INTEGER),
    ("timeout_team", TEXT),
    ("td_team", TEXT),
    ("td_player_name", TEXT),
    ("td_player_id", TEXT),
    ("posteam_timeouts_remaining", INTEGER),
    ("defteam_timeouts_remaining", INTEGER),
    ("total_home_score", INTEGER),
    ("total_away_score", INTEGER),
    ("posteam_score", INTEGER),
    ("defteam_score", INTEGER),
    ("score_differential", INTEGER),
    ("posteam_score_post", INTEGER),
    ("defteam_score_post", INTEGER),
    ("score_differential_post", INTEGER),
    ("no_score_prob", FLOAT),
    ("opp_fg_prob", FLOAT),
    ("opp_safety_prob", FLOAT),
    ("opp_td_prob", FLOAT),
    ("fg_prob", FLOAT),
    ("safety_prob", FLOAT),
    ("td_prob", FLOAT),
    ("extra_point_prob", FLOAT),
    ("two_point_conversion_prob", FLOAT),
    ("ep", FLOAT),
    ("epa", FLOAT),
    ("total_home_epa", FLOAT),
    ("total_away_epa", FLOAT),
    ("total_home_rush_epa", FLOAT),
    ("total_away_rush_epa", FLOAT),
    ("total_home_pass_epa", FLOAT),
    ("total_away_pass_epa", FLOAT),
    ("air_epa", FLOAT),
    ("yac_epa", FLOAT),
    ("comp_air_epa", FLOAT),
    ("comp_yac_epa", FLOAT),
    ("total_home_comp_air_epa", FLOAT),
    ("total_away_comp_air_epa", FLOAT),
    ("total_home_comp_yac_epa", FLOAT),
    ("total_away_comp_yac_epa", FLOAT),
    ("total_home_raw_air_epa", FLOAT),
    ("total_away_raw_air_epa", FLOAT),
    ("total_home_raw_yac_epa", FLOAT),
    ("total_away_raw_yac_epa", FLOAT),
    ("wp", FLOAT),
    ("def_wp", FLOAT),
    ("home_wp", FLOAT),
    ("away_wp", FLOAT),
    ("vegas_wp", FLOAT),
    ("vegas_home_wp", FLOAT),
    ("wpa", FLOAT),
    ("vegas_wpa", FLOAT),
    ("vegas_home_wpa", FLOAT),
    ("home_wp_post", FLOAT),
    ("away_wp_post", FLOAT),
    ("total_home_rush_wpa", FLOAT),
    ("total_away_rush_wpa", FLOAT),
    ("total_home_pass_wpa", FLOAT),
    ("total_away_pass_wpa", FLOAT),
    ("air_wpa", FLOAT),
    ("yac_wpa", FLOAT),
    ("comp_air_wpa", FLOAT),
    ("comp_yac_wpa", FLOAT),
    ("total_home_comp_air_wpa", FLOAT),
    ("total_away_comp_air_wpa", FLOAT),
    ("total_home_comp_yac_wpa", FLOAT),
    ("total_away_comp_yac_wpa", FLOAT),
    ("total_home_raw_air_wpa", FLOAT),
    ("total_away_raw_air_wpa", FLOAT),
    ("total_home_raw_yac_wpa", FLOAT),
    ("total_away_raw_yac_wpa", FLOAT),
    ("punt_blocked", TEXT),
    ("first_down_rush", TEXT),
    ("first_down_pass", TEXT),
    ("first_down_penalty", TEXT),
    ("third_down_converted", TEXT),
    ("third_down_failed", TEXT),
    ("fourth_down_converted", TEXT),
    ("fourth_down_failed", TEXT),
    ("incomplete_pass", TEXT),
    ("touchback", TEXT),
    ("interception", TEXT),
    ("punt_inside_twenty", TEXT),
    ("punt_in_endzone", TEXT),
    ("punt_out_of_bounds", TEXT),
    ("punt_downed", TEXT),
    ("punt_fair_catch", TEXT),
    ("kickoff_inside_twenty", TEXT),
    ("kickoff_in_endzone", TEXT),
    ("kickoff_out_of_bounds", TEXT),
    ("kickoff_downed", TEXT),
    ("kickoff_fair_catch", TEXT),
    ("fumble_forced", TEXT),
    ("fumble_not_forced", TEXT),
    ("fumble_out_of_bounds", TEXT),
    ("solo_tackle", TEXT),
    ("safety", TEXT),
    ("penalty", TEXT),
    ("tackled_for_loss", TEXT),
    ("fumble_lost", TEXT),
    ("own_kickoff_recovery", TEXT),
    ("own_kickoff_recovery_td", TEXT),
    ("qb_hit", TEXT),
    ("rush_attempt", TEXT),
    ("pass_attempt", TEXT),
    ("sack", TEXT),
    ("touchdown", TEXT),
    ("pass_touchdown", TEXT),
    ("rush_touchdown", TEXT),
    ("return_touchdown", TEXT),
    ("extra_point_attempt", TEXT),
    ("two_point_attempt", TEXT),
    ("field_goal_attempt", TEXT),
    ("kickoff_attempt", TEXT),
    ("punt_attempt", TEXT),
    ("fumble", TEXT),
    ("complete_pass", TEXT),
    ("assist_tackle", TEXT),
    ("lateral_reception", TEXT),
    ("lateral_rush", TEXT),
    ("lateral_return", TEXT),
    ("lateral_recovery", TEXT),
    ("passer_player_id", TEXT),
    ("passer_player_name", TEXT),
    ("passing_yards", INTEGER),
    ("receiver_player_id", TEXT),
    ("receiver_player_name", TEXT),
    ("receiving_yards", INTEGER),
    ("rusher_player_id", TEXT),
    ("rusher_player_name", TEXT),
    ("rushing_yards", INTEGER),
    ("lateral_receiver_player_id", TEXT),
    ("lateral_receiver_player_name", TEXT),
    ("lateral_receiving_yards", INTEGER),
    ("lateral_rusher_player_id", TEXT),
    ("lateral_rusher_player_name", TEXT),
    ("lateral_rushing_yards", INTEGER),
    ("lateral_sack_player_id", TEXT),
    ("lateral_sack_player_name", TEXT),
    ("interception_player_id", TEXT),
    ("interception_player_name", TEXT),
    ("lateral_interception_player_id", TEXT),
    ("lateral_interception_player_name", TEXT),
    ("punt_returner_player_id", TEXT),
    ("punt_returner_player_name", TEXT),
    ("lateral_punt_returner_player_id", TEXT),
    ("lateral_punt_returner_player_name", TEXT),
    ("kickoff_returner_player_name", TEXT),
    ("kickoff_returner_player_id", TEXT),
    ("lateral_kickoff_returner_player_id", TEXT),
    ("lateral_kickoff_returner_player_name", TEXT),
    ("punter_player_id", TEXT),
    ("punter_player_name", TEXT),
    ("kicker_player_name", TEXT),
    ("kicker_player_id", TEXT),
    ("own_kickoff_recovery_player_id", TEXT),
    ("own_kickoff_recovery_player_name", TEXT),
    ("blocked_player_id", TEXT),
    ("blocked_player_name", TEXT),
    ("tackle_for_loss_1_player_id", TEXT),
    ("tackle_for_loss_1_player_name", TEXT),
    ("tackle_for_loss_2_player_id", TEXT),
    ("tackle_for_loss_2_player_name", TEXT),
    ("qb_hit_1_player_id", TEXT),
    ("qb_hit_1_player_name", TEXT),
    ("qb_hit_2_player_id", TEXT),
    ("qb_hit_2_player_name", TEXT),
    ("forced_fumble_player_1_team", TEXT),
    ("forced_fumble_player_1_player_id", TEXT),
    ("forced_fumble_player_1_player_name", TEXT),
    ("forced_fumble_player_2_team", TEXT),
    ("forced_fumble_player_2_player_id", TEXT),
    ("forced_fumble_player_2_player_name", TEXT),
    ("solo_tackle_1_team", TEXT),
    ("solo_tackle_2_team", TEXT),
    ("solo_tackle_1_player_id", TEXT),
    ("solo_tackle_2_player_id", TEXT),
    ("solo_tackle_1_player_name", TEXT),
    ("solo_tackle_2_player_name", TEXT),
    ("assist_tackle_1_player_id", TEXT),
    ("assist_tackle_1_player_name", TEXT),
    ("assist_tackle_1_team", TEXT),
    ("assist_tackle_2_player_id", TEXT),
    ("assist_tackle_2_player_name", TEXT),
    ("assist_tackle_2_team", TEXT),
    ("assist_tackle_3_player_id", TEXT),
    ("assist_tackle_3_player_name", TEXT),
    ("assist_tackle_3_team", TEXT),
    ("assist_tackle_4_player_id", TEXT),
    ("assist_tackle_4_player_name", TEXT),
    ("assist_tackle_4_team", TEXT),
    ("tackle_with_assist", TEXT),
    ("tackle_with_assist_1_player_id", TEXT),
    ("tackle_with_assist_1_player_name", TEXT),
    ("tackle_with_assist_1_team", TEXT),
    ("tackle_with_assist_2_player_id", TEXT),
    ("tackle_with_assist_2_player_name", TEXT),
    ("tackle_with_assist_2_team", TEXT),
    ("pass_defense_1_player_id", TEXT),
    ("pass_defense_1_player_name", TEXT),
    ("pass_defense_2_player_id", TEXT),
    ("pass_defense_2_player_name", TEXT),
    ("fumbled_1_team", TEXT),
    ("fumbled_1_player_id", TEXT),
    ("fumbled_1_player_name", TEXT),
    ("fumbled_2_player_id", TEXT),
    ("fumbled_2_player_name", TEXT),
    ("fumbled_2_team", TEXT),
    ("fumble_recovery_1_team", TEXT),
    ("fumble_recovery_1_yards", INTEGER),
    ("fumble_recovery_1_player_id", TEXT),
    ("fumble_recovery_1_player_name", TEXT),
    ("fumble_recovery_2_team", TEXT),
    ("fumble_recovery_2_yards", INTEGER),
    ("fumble_recovery_2_player_id", TEXT),
    ("fumble_recovery_2_player_name", TEXT),
    ("sack_player_id", TEXT),
    ("sack_player_name", TEXT),
    ("half_sack_1_player_id", TEXT),
    ("half_sack_1_player_name", TEXT),
    ("half_sack_2_player_id", TEXT),
    ("half_sack_2_player_name", TEXT),
    ("return_team", TEXT),
    ("return_yards", INTEGER),
    ("penalty_team", TEXT),
    ("penalty_player_id", TEXT),
    ("penalty_player_name", TEXT),
    ("penalty_yards", INTEGER),
    ("replay_or_challenge", TEXT),
    ("replay_or_challenge_result", TEXT),
    ("penalty_type", TEXT),
    ("defensive_two_point_attempt", TEXT),
    ("defensive_two_point_conv", TEXT),
    ("defensive_extra_point_attempt", TEXT),
    ("defensive_extra_point_conv", TEXT),
    ("safety_player_name", TEXT),
    ("safety_player_id", TEXT),
    ("season", INTEGER),
    ("cp", FLOAT),
    ("cpoe", FLOAT),
    ("series", INTEGER),
    ("series_success", TEXT),
    ("series_result", TEXT),
    ("order_sequence", INTEGER),
    ("start_time", TEXT),
    ("time_of_day", TEXT),
    ("stadium", TEXT),
    ("weather", TEXT),
    ("nfl_api_id", TEXT),
    ("play_clock", INTEGER),
    ("play_deleted", TEXT),
    ("play_type_nfl", TEXT),
    ("special_teams_play", TEXT),
    ("st_play_type", TEXT),
    ("end_clock_time", TEXT),
    ("end_yard_line", TEXT),
    ("fixed_drive", INTEGER),
    ("fixed_drive_result", TEXT),
    ("drive_real_start_time", TEXT),
    ("drive_play_count", INTEGER),
    ("drive_time_of_possession", TEXT),
    ("drive_first_downs", INTEGER),
    ("drive_inside20", TEXT),
    ("drive_ended_with_score", TEXT),
    ("drive_quarter_start", INTEGER),
    ("drive_quarter_end", INTEGER),
    ("drive_yards_penalized", INTEGER),
    ("drive_start_transition", TEXT),
    ("drive_end_transition", TEXT),
    ("drive_game_clock_start", TEXT),
    ("drive_game_clock_end", TEXT),
    ("drive_start_yard_line", TEXT),
    ("drive_end_yard_line", TEXT),
    ("drive_play_id_started", TEXT),
    ("drive_play_id_ended", TEXT),
    ("away_score", INTEGER),
    ("home_score", INTEGER),
    ("location", TEXT),
    ("result", INTEGER),
    ("total", INTEGER),
    ("spread_line", FLOAT),
    ("total_line", FLOAT),
    ("div_game", TEXT),
    ("roof", TEXT),
    ("surface", TEXT),
    ("temp", INTEGER),
    ("wind", INTEGER),
    ("home_coach", TEXT),
    ("away_coach", TEXT),
    ("stadium_id", TEXT),
    ("game_stadium", TEXT),
    ("aborted_play", TEXT),
    ("success", TEXT),
    ("passer", TEXT),
    ("passer_jersey_number", TEXT),
    ("rusher", TEXT),
    ("rusher_jersey_number", TEXT),
    ("receiver", TEXT),
    ("receiver_jersey_number", TEXT),
    ("pass", TEXT),
    ("rush", TEXT),
    ("first_down", TEXT),
    ("special", TEXT),
    ("play", TEXT),
    ("passer_id", TEXT),
    ("rusher_id", TEXT),
    ("receiver_id", TEXT),
    ("name", TEXT),
    ("jersey_number", TEXT),
    ("id", TEXT),
    ("fantasy_player_name", TEXT),
    ("fantasy_player_id", TEXT),
    ("fantasy", TEXT),
    ("fantasy_id", TEXT),
    ("out_of_bounds", TEXT),
    ("home_opening_kickoff", TEXT),
    ("qb_epa", FLOAT),
    ("xyac_epa", FLOAT),
    ("xyac_mean_yardage", FLOAT),
    ("xyac_median_yardage", FLOAT),
    ("xyac_success", FLOAT),
    ("xyac_fd", FLOAT),
    ("xpass", FLOAT),
    ("pass_oe", FLOAT),
)

TABLE_SPEC = TableSpec(name=TABLE_NAME, columns=COLUMNS, conflict_key=("play_id", "game_id"))
