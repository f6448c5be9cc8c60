from maze_search.simulator import main

if __name__ == "__main__":
    main()
