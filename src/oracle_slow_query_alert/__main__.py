from oracle_slow_query_alert.cli import main

main()
