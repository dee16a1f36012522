"""
Faculty timetable portal: turns class timetables into faculty accounts and timetables.
"""
