from repl_queue.main import main

main()
