from cassandra_users.main import main

main()
